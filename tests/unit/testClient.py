""" Test for the Client classes. """
from txclientstore import GrantTypes

from tests import TwistedTestCase
from txclientstore.util import isAnyStr
from txclientstore.clients import Client, PasswordClient, ClientPermission


class ClientTest(TwistedTestCase):
    """ Tests the functionality of the Client object. """

    def testClientAttributeTypes(self):
        """ Ensure that all attributes of the client are of the expected type. """
        client = Client('clientId', 'secret', 'https://valid.nonexistent', False, 'userId',
                        GrantTypes.CLIENT_CREDENTIALS)
        self.assertTrue(isAnyStr(client.id), msg='The client id must be a string.')
        self.assertIsInstance(client.secret, str, 'The client secret must be a string.')
        self.assertIsInstance(client.domain, str, 'The domain must be a string.')
        self.assertIsInstance(client.public, bool, 'The public flag must be a bool.')
        self.assertIsInstance(client.userId, str, 'The user id must be a string.')
        self.assertIsInstance(client.grantType, str, 'The grant type must be a string.')

    def testDefaults(self):
        """ Test that only the client id is required. """
        client = Client('clientId')
        self.assertEqual('', client.secret)
        self.assertEqual('', client.domain)
        self.assertFalse(client.public)
        self.assertEqual('', client.userId)
        self.assertEqual('', client.grantType)

    def testAcceptsEmptyClientId(self):
        """ Test that a client can be created with an empty id. """
        self.assertEqual('', Client('').id)

    def testValidatesClientId(self):
        """ Test that the client only accepts client ids that are a string. """
        for clientId in [b'clientId', 1, None, True, [], {}, object()]:
            self.assertRaises(ValueError, Client, clientId)

    def testValidatesStringFields(self):
        """ Test that the client only accepts strings for its string fields. """
        for name in ['secret', 'domain', 'userId', 'grantType']:
            for value in [b'value', 1, None, True, [], object()]:
                self.assertRaises(ValueError, Client, 'clientId', **{name: value})

    def testValidatesPublic(self):
        """ Test that the client only accepts a bool as the public flag. """
        for public in [1, 0, None, 'true', object()]:
            self.assertRaises(ValueError, Client, 'clientId', public=public)

    def testValidatesGrantTypes(self):
        """ Test that the client accepts grant types as strings and as GrantTypes objects. """
        for grantType in GrantTypes:
            try:
                self.assertEqual(grantType.value, Client('clientId', grantType=grantType).grantType)
                self.assertEqual(grantType.value,
                                 Client('clientId', grantType=grantType.value).grantType)
            except ValueError as error:
                self.fail('Expected Client to accept the grant type: ' + str(error))
        self.assertEqual('custom_grant', Client('clientId', grantType='custom_grant').grantType,
                         msg='Expected Client to keep an unknown grant type.')

    def testEquality(self):
        """ Test that clients are compared by their values. """
        self.assertEqual(Client('clientId', 'secret'), Client('clientId', 'secret'))
        self.assertNotEqual(Client('clientId', 'secret'), Client('clientId', 'otherSecret'))
        self.assertNotEqual(Client('clientId', grantType=GrantTypes.PASSWORD),
                            PasswordClient('clientId'),
                            msg='Expected clients of different classes to differ.')


class PasswordClientTest(TwistedTestCase):
    """ Tests the functionality of the PasswordClient object. """

    def testGrantType(self):
        """ Test that a password client always has the password grant type. """
        client = PasswordClient('clientId', 'secret', password='password', account='account')
        self.assertEqual(GrantTypes.PASSWORD.value, client.grantType)
        self.assertIsInstance(client, Client)

    def testPasswordFields(self):
        """ Test that the password client stores the password and account. """
        client = PasswordClient('clientId', password='password', account='account')
        self.assertEqual('password', client.password)
        self.assertEqual('account', client.account)

    def testValidatesPasswordFields(self):
        """ Test that the password client only accepts strings as password and account. """
        for value in [b'value', 1, None, True, object()]:
            self.assertRaises(ValueError, PasswordClient, 'clientId', password=value)
            self.assertRaises(ValueError, PasswordClient, 'clientId', account=value)


class ClientPermissionTest(TwistedTestCase):
    """ Tests the functionality of the ClientPermission object. """

    def testFields(self):
        """ Test that the permission keeps its fields. """
        permission = ClientPermission({'resource': 'clock'}, action='view')
        self.assertEqual({'resource': 'clock', 'action': 'view'}, permission.fields)
        self.assertEqual('clock', permission['resource'])
        self.assertEqual('view', permission.get('action'))
        self.assertIsNone(permission.get('missing'))
        self.assertRaises(KeyError, lambda: permission['missing'])

    def testEquality(self):
        """ Test that permissions are compared by their fields. """
        self.assertEqual(ClientPermission(resource='clock'),
                         ClientPermission({'resource': 'clock'}))
        self.assertNotEqual(ClientPermission(resource='clock'), ClientPermission(resource='time'))

    def testValidatesFields(self):
        """ Test that the permission only accepts a dict with string keys as fields. """
        for fields in ['x', 1, True, [], [('resource', 'clock')], {1: 'clock'}]:
            self.assertRaises(ValueError, ClientPermission, fields)
