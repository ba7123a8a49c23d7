from .plugin import UtilityPlugin

PLUGIN_METADATA = {
    "name": "Utility",
    "version": "1.0.0",
    "author": "Spectra",
    "description": "Server information and command help",
    "dependencies": [],
}


def setup(bot):
    return UtilityPlugin(bot)
