"""TeamTime package.

Geofenced attendance check-in organised by feature modules (geofence,
attendance, reporting, location) with a thin Flask controller layer over
service/repository layers.
"""
