"""salesbook: contacts, meetings, reminders, sales and tags driven by typed commands."""

__version__ = "0.1.0"
