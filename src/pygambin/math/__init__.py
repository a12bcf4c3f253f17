"""
Numerical routines of pygambin: the GamBin kernels and their mixtures.
"""
