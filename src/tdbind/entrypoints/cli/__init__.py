"""The ``tdbind`` command line."""
