from .estimator import ForecastEstimator, ForecastResult, daily_totals

__all__ = ["ForecastEstimator", "ForecastResult", "daily_totals"]
