"""Response prefixes shared by every command."""

SUCCESS = "✅ "
WARNING = "⚠️ "
ERROR = "❌ "
LINESTART = "  ➣  "

MODLOG_MUTE = "\N{SPEAKER WITH CANCELLATION STROKE}"
MODLOG_UNMUTE = "\N{SPEAKER}"
SERVER_INFO = "\N{DESKTOP COMPUTER}"
