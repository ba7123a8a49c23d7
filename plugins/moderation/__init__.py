from .plugin import ModerationPlugin

PLUGIN_METADATA = {
    "name": "Moderation",
    "version": "1.0.0",
    "author": "Spectra",
    "description": "Role based mutes with automatic expiry",
    "dependencies": [],
}


def setup(bot):
    return ModerationPlugin(bot)
