"""Money Tracker package.

A small personal finance tracker: record income and expense transactions,
keep them in a SQL database and review totals and a category breakdown.
See ``app.py`` (Streamlit dashboard) and ``api.py`` (JSON API) for entry
points.
"""
