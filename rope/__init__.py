"""Elastic Bezier: a cubic curve whose handles hang on springs."""
