"""Showcase analytics: fixtures, filters, aggregations, time series and view binding."""
