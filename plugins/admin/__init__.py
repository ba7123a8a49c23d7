from .plugin import AdminPlugin

PLUGIN_METADATA = {
    "name": "Admin",
    "version": "1.0.0",
    "author": "Spectra",
    "description": "Per-server configuration: moderator role, moderation log and prefix",
    "dependencies": [],
}


def setup(bot):
    return AdminPlugin(bot)
