""" This file contains defines parameters for glmnetpath that we use to fill
settings in setup.py and the top-level docstring.
"""

CLASSIFIERS = ["Development Status :: 3 - Alpha",
               "Environment :: Console",
               "Intended Audience :: Science/Research",
               "License :: OSI Approved :: MIT License",
               "Operating System :: OS Independent",
               "Programming Language :: Python",
               "Programming Language :: Python :: 3",
               "Topic :: Scientific/Engineering"]

description  = 'Elastic net regularization paths for generalized linear models'

# versions
NUMPY_MIN_VERSION = '1.22'
SCIPY_MIN_VERSION = '1.8'
PANDAS_MIN_VERSION = '1.4'
SKLEARN_MIN_VERSION = '1.3'
STATSMODELS_MIN_VERSION = '0.13'
TQDM_MIN_VERSION = '4.60'

NAME                = 'glmnetpath'
MAINTAINER          = "glmnetpath developers"
MAINTAINER_EMAIL    = ""
DESCRIPTION         = description
LONG_DESCRIPTION    = description
URL                 = ""
DOWNLOAD_URL        = ""
LICENSE             = "MIT license"
CLASSIFIERS         = CLASSIFIERS
AUTHOR              = "glmnetpath developers"
AUTHOR_EMAIL        = ""
PLATFORMS           = "OS Independent"
STATUS              = 'alpha'
VERSION             = '0.1.0'
PROVIDES            = []
REQUIRES            = ["numpy>=%s" % NUMPY_MIN_VERSION,
                       "scipy>=%s" % SCIPY_MIN_VERSION,
                       "pandas>=%s" % PANDAS_MIN_VERSION,
                       "scikit-learn>=%s" % SKLEARN_MIN_VERSION,
                       "statsmodels>=%s" % STATSMODELS_MIN_VERSION,
                       "tqdm>=%s" % TQDM_MIN_VERSION,
                       ]
