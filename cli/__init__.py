"""
K4Manager command line interface.
"""
