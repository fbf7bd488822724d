"""
Covariance Stability Study

Streams synthetic paired observations through three incremental covariance
estimators (naive sums, Kahan-compensated sums, Welford-style running means)
and measures how far each one drifts from the closed-form covariance as the
stream grows and the values get larger.
"""

__version__ = "0.1.0"
