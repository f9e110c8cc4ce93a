"""FlowHR attendance package.

Organized by feature modules (schedules, location, attendance, early_checkout)
with a thin Flask controller layer over service/repository layers.
"""
