"""Static configuration values for the utility plugin."""

import hikari

# Shown instead of the highest verification level
TABLEFLIP = "(╯°□°）╯︵ ┻━┻"

ONLINE_STATUSES = {hikari.Status.ONLINE, hikari.Status.IDLE}
