"""Prometheus metrics for PostDesk.

Defines operational counters for the mail desk. Labels never carry room
numbers or initials.
"""

from prometheus_client import Counter

# Lifecycle metrics
mail_items_created_total = Counter(
    "postdesk_mail_items_created_total",
    "Total mail items logged by staff",
    ["kind"]  # kind: letter|package|unspecified
)

mail_items_received_total = Counter(
    "postdesk_mail_items_received_total",
    "Total mail items marked as received",
)

mail_items_edited_total = Counter(
    "postdesk_mail_items_edited_total",
    "Total mail item edits",
)

# Query metrics
mail_browse_total = Counter(
    "postdesk_mail_browse_total",
    "Total staff browse requests",
    ["filtered"]  # filtered: true|false
)

guest_lookups_total = Counter(
    "postdesk_guest_lookups_total",
    "Total guest lookups",
    ["outcome"]  # outcome: found|empty
)

# Store metrics
store_failures_total = Counter(
    "postdesk_store_failures_total",
    "Record store operations that failed",
    ["operation"]
)
