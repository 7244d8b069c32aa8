"""Tiling, image containers, covariance similarity measures, NL-SAR training statistics and tile sizing for SAR despeckling."""

__version__ = "0.1.0"