from setuptools import setup

setup(
    name='txclientstore',
    version='1.0.0',
    author='Sebastian Scholz',
    author_email='abestanis.gc@gmail.com',
    description='Store OAuth2 clients and their permissions in a key value storage with twisted',
    long_description='A module that stores OAuth2 client registrations and the permissions '
                     'granted to them in Redis or another key value storage, using twisted.',
    license='MIT',
    keywords=['OAuth2', 'twisted', 'redis'],
    packages=['txclientstore'],
    python_requires='>=3.8',
    install_requires=['twisted', 'redis>=6.2'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Security',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Framework :: Twisted',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
