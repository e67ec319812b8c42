"""sobuild - incremental builds of C/C++ applications into shared libraries."""

__version__ = "0.1.0"
