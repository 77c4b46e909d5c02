"""Services — the idempotent installer and the steps built on top of it."""
