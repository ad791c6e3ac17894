"""
mysql2csv: Stream SQL query results into CSV files.

Executes one or more statements against a database and writes each
result set as CSV, either to stdout, a single file, or one numbered
file per result set.
"""

__version__ = "1.1.0"
