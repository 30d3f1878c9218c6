#!/usr/bin/env python
''' Installation script for glmnetpath package '''

import os

# BEFORE importing distutils, remove MANIFEST. distutils doesn't properly
# update it when the contents of directories change.
if os.path.exists('MANIFEST'): os.remove('MANIFEST')

from setuptools import setup

# get metadata without importing the package

info = {}
with open(os.path.join('glmnetpath', 'info.py'), 'rt', encoding='utf-8') as f:
    exec(f.read(), {}, info)

# get long_description

long_description = open('README.md', 'rt', encoding='utf-8').read()
long_description_content_type = 'text/markdown'

def main(**extra_args):
    setup(name=info['NAME'],
          version=info['VERSION'],
          maintainer=info['MAINTAINER'],
          description=info['DESCRIPTION'],
          license=info['LICENSE'],
          classifiers=info['CLASSIFIERS'],
          author=info['AUTHOR'],
          platforms=info['PLATFORMS'],
          packages = ['glmnetpath',
                      'glmnetpath.paths'],
          python_requires='>=3.9',
          install_requires=info['REQUIRES'],
          extras_require={'test':['pytest']},
          data_files=[],
          scripts=[],
          long_description=long_description,
          long_description_content_type=long_description_content_type,
          **extra_args
         )

#simple way to test what setup will do
#python setup.py install --prefix=/tmp
if __name__ == "__main__":
    main()
