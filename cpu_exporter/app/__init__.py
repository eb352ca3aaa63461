"""HTTP application and background sampler"""
