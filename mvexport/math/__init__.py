"""
Matrix data structures for mvexport.
"""
