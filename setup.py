#!/usr/bin/env python
# encoding: utf-8

from setuptools import setup

setup(
    name='cipherkit',
    description='Block and stream cipher substrate: buffers, lane batching and keystream bookkeeping.',
    version='0.1',

    license='MIT',

    author='aldur',
    author_email='adrianodl@hotmail.it',

    packages=['cipherkit'],
    install_requires=[
        'pycryptodome',
        'colorama'
    ],

    scripts=['bin/cipherkit'],

    zip_safe=False,
    include_package_data=True,
)
