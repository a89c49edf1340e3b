import os.path

from setuptools import find_packages, setup

from s3request.version import VERSION


def readme():
    try:
        with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as f:
            return f.read()
    except (IOError, OSError):
        pass


install_requires = []

tests_require = [
    'pytest >= 3.0.0'
]


setup(
    name='S3-Request',
    version=VERSION,
    description='Signed AWS S3 requests with credential lookup and retries',
    long_description=readme(),
    license='MIT License',
    packages=find_packages(exclude=['tests']),
    install_requires=install_requires,
    extras_require={'tests': tests_require},
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Security :: Cryptography'
    ]
)
