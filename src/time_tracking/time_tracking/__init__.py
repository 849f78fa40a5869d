"""Time tracking package.

Feature modules (events, sessions, aggregation, attendance, analytics, tracking)
hold the pure time & attendance computations. The clock feature adds a thin Flask
controller and a MySQL repository around them.
"""
