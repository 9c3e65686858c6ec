import os

from setuptools import setup, find_packages

def read(fname):
    with open(os.path.join(os.path.dirname(__file__), fname)) as f:
        return f.read()

setup(
    name = 'stompmux',
    version = '1.0a1',
    author = 'Jan Müller',
    author_email = 'nikipore@gmail.com',
    description = 'Twisted STOMP client which multiplexes topic listeners over one connection and queues sends until the session is established.',
    license = 'Apache License 2.0',
    packages = find_packages(),
    long_description=read('README.txt'),
    keywords = 'stomp twisted activemq rabbitmq apollo',
    url = 'https://github.com/nikipore/stompmux',
    include_package_data = True,
    zip_safe = True,
    python_requires = '>=3.7',
    install_requires = [
        'twisted'
    ],
    extras_require = {
        'test': ['mock', 'pytest']
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Framework :: Twisted',
        'Topic :: System :: Networking',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
)
