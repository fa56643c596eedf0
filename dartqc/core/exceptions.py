#!/usr/bin/env python

class DartQCError(Exception):
    """Raise a custom exception that will report with traceback.

    This is used to catch and report fatal errors in the reporting
    and filtering tools, such as a genlight missing the locus metrics
    that a tool requires.
    """
    def __init__(self, *args, **kwargs):
        Exception.__init__(self, *args, **kwargs)
