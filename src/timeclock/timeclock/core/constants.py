"""Constants and defaults."""

ISO_DATE_FORMAT = "%Y-%m-%d"

SESSION_USER_ID = "user_id"
SESSION_COMPANY_ID = "company_id"
SESSION_ROLE = "role"
SESSION_NAME = "name"

