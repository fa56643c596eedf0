#!/usr/bin/env python

"""Core data structures, schemas and logging for dartqc."""
