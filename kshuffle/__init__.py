import sys

if sys.version_info < (3, 10):
    raise Exception("The kshuffle code needs Python 3.10 or later.")

# Note that the version string below must have the following format,
# otherwise it will not be found by the version() function in ../setup.py
__version__ = "0.3.0"
