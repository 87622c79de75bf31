"""Runs Retrolambda over compiled Java classes, in-process or in a forked JVM."""

__version__ = "2.5.8"
