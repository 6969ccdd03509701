"""
Core cross-cutting pieces: the application exception taxonomy.
"""
