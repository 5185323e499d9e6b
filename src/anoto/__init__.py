"""Anoto - a daily planner and journal with reminders for days ahead."""
