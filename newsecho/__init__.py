"""NewsEcho: newsletter publishing platform (landing page, subscriber and admin API)."""
