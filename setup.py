#!/usr/bin/env python
__license__ = """
Copyright 2015 Parse.ly, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
import os
import re

from setuptools import setup, find_packages


# Get version without importing, which avoids dependency issues
def get_version():
    with open(os.path.join(os.path.dirname(__file__), 'kafkawire/__init__.py')) as version_file:
        return re.search(r"""__version__\s+=\s+(['"])(?P<version>.+?)\1""",
                         version_file.read()).group('version')


install_requires = []

tests_require = [
    'pytest',
    'mock',
]

lint_requires = [
    'pep8',
    'pyflakes'
]

setup(
    name='kafkawire',
    version=get_version(),
    author='Keith Bourgoin and Emmett Butler',
    author_email='pykafka-user@googlegroups.com',
    description='Wire-level codec for the Kafka protocol: messages, message sets '
                'and request/response framing',
    keywords='apache kafka protocol codec',
    license='Apache License 2.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=install_requires,
    extras_require={
        'test': tests_require,
        'lint': lint_requires,
    },
    python_requires='>=3.6',
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ]
)
