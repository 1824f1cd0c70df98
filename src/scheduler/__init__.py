"""Periodic monitor cycle.

Schedule overview:
  - at startup       - one immediate cycle
  - */5 * * * *      - scrape, reconcile, notify (configurable via SCHEDULE_CRON)
"""
