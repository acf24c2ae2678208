"""Site Pulse package.

Hourly site reporting for construction projects: the workday is split into
fixed reporting periods, only the open period may be submitted, and each
submission is merged into one daily target record on the backend.
Organized by feature modules (periods, sessions, hourly_reports, ...) with a
thin Flask controller layer over service/repository layers.
"""
