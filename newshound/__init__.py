"""Newshound: exception, warning and job-queue reporting for web applications.

Newshound shows authorized users a banner summarizing recent exceptions,
warnings and background-job health, and delivers the same information as
a daily digest to Slack or AWS SNS.
"""

__version__ = "0.1.0"
