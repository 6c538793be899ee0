"""
samplegate.runtime
==================

Runtimes that drive several processors from one sample stream.
"""
