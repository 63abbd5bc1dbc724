#!/usr/bin/env python3
"""
Setup script for onvifsoap
"""

from setuptools import setup, find_packages
import os

# Read README for long description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='onvifsoap',
    version='1.0.0',
    description='onvifsoap - Schema-driven ONVIF SOAP client runtime',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    author='',
    author_email='',
    license='MIT',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=[
        'requests>=2.25.0',
        'python-dotenv>=0.19.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-asyncio>=0.21',
        ],
    },
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Video :: Capture',
        'Topic :: System :: Networking',
    ],
    keywords='onvif soap camera ptz ws-security wsdiscovery',
)
