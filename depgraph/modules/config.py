import configparser
import os

DEFAULT_LOCATIONS = [
    "/etc/depgraph/depgraph.conf",
    os.path.expanduser("~/.config/depgraph/depgraph.conf"),
]

DEFAULTS = {
    "logging": {
        "level": "warning",
        "log_file": os.path.expanduser("~/.cache/depgraph/depgraph.log"),
        "log_to_file": "false",
        "log_to_console": "true",
        "color_output": "true",
        "log_format": "text",
        "timestamp_utc": "false",
        "max_log_size_kb": "0",
    },
    "graph": {
        "sort_edges": "true",
        "strict_reuse": "true",
    },
}


def default_locations():
    env = os.environ.get("DEPGRAPH_CONF")
    if env:
        return [env] + DEFAULT_LOCATIONS
    return list(DEFAULT_LOCATIONS)


class DepGraphConfig:
    def __init__(self, locations=None):
        self.locations = locations if locations is not None else default_locations()
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        self.reload()

    def reload(self):
        """(Re)carrega a configuração: defaults embutidos + primeiro arquivo disponível."""
        self.config = configparser.ConfigParser()
        self.config.read_dict(DEFAULTS)
        self.loaded_from = None
        for path in self.locations:
            if os.path.isfile(path):
                self.config.read(path)
                self.loaded_from = path
                return

    def get(self, section, option, fallback=None):
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return fallback

    def getboolean(self, section, option, fallback=False):
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

    def getint(self, section, option, fallback=0):
        try:
            return self.config.getint(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

    def getlist(self, section, option, fallback=None, delimiter=","):
        raw = self.get(section, option, fallback="")
        if raw:
            return [item.strip() for item in raw.split(delimiter) if item.strip()]
        return fallback or []

    def __getitem__(self, section):
        if section in self.config:
            return dict(self.config[section])
        raise KeyError(f"Seção '{section}' não encontrada.")

    def __contains__(self, section):
        return section in self.config

# Instância global padrão para uso em outros módulos
config = DepGraphConfig()
