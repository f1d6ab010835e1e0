import os
import sys
import datetime
import threading
import json

from depgraph.modules.config import config

class Logger:
    LEVELS = {
        "debug": 10,
        "info": 20,
        "success": 25,
        "warning": 30,
        "error": 40,
    }

    LOG_COLORS = {
        "DEBUG": "\033[90m",    # Cinza
        "INFO": "\033[94m",     # Azul
        "SUCCESS": "\033[92m",  # Verde
        "WARNING": "\033[93m",  # Amarelo
        "ERROR": "\033[91m",    # Vermelho
        "RESET": "\033[0m"
    }

    def __init__(self, name="depgraph", settings=None):
        settings = settings or config
        self.name = name
        self.log_file = settings.get("logging", "log_file", fallback=os.path.expanduser("~/.cache/depgraph/depgraph.log"))
        self.color_output = settings.getboolean("logging", "color_output", fallback=True)
        self.log_to_file = settings.getboolean("logging", "log_to_file", fallback=False)
        self.log_to_console = settings.getboolean("logging", "log_to_console", fallback=True)
        self.use_utc = settings.getboolean("logging", "timestamp_utc", fallback=False)
        self.log_format = settings.get("logging", "log_format", fallback="text").lower()
        self.max_log_size_kb = settings.getint("logging", "max_log_size_kb", fallback=0)
        self.stream = None  # None: sys.stderr no momento da escrita

        self.set_level(settings.get("logging", "level", fallback="warning"))

        if self.log_to_file:
            self._ensure_dir(self.log_file)

        self._lock = threading.Lock()

    def set_level(self, level_str):
        self.min_level = self.LEVELS.get(str(level_str).lower(), 30)

    def _ensure_dir(self, filepath):
        dirpath = os.path.dirname(filepath)
        if not dirpath:
            return
        try:
            os.makedirs(dirpath, exist_ok=True)
        except OSError as e:
            print(f"Logger: falha ao criar diretório de log {dirpath}: {e}", file=sys.stderr)

    def _get_timestamp(self):
        if self.use_utc:
            now = datetime.datetime.now(datetime.timezone.utc)
        else:
            now = datetime.datetime.now()
        return now.strftime("%Y-%m-%d %H:%M:%S")

    def _rotate_if_needed(self, filepath):
        if self.max_log_size_kb <= 0:
            return
        if os.path.exists(filepath) and os.path.getsize(filepath) > self.max_log_size_kb * 1024:
            rotated = filepath + ".1"
            try:
                if os.path.exists(rotated):
                    os.remove(rotated)
                os.rename(filepath, rotated)
            except OSError as e:
                print(f"Logger: erro ao rotacionar log {filepath}: {e}", file=sys.stderr)

    def _write_file(self, filepath, message):
        if not self.log_to_file:
            return
        self._rotate_if_needed(filepath)
        try:
            with open(filepath, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError as e:
            print(f"Logger: falha ao escrever no arquivo de log {filepath}: {e}", file=sys.stderr)

    def _format_text(self, level, message):
        timestamp = self._get_timestamp()
        return f"[{timestamp}] [{self.name}] [{level}] {message}"

    def _format_json(self, level, message):
        return json.dumps({
            "timestamp": self._get_timestamp(),
            "logger": self.name,
            "level": level,
            "message": message
        })

    def _format_message(self, level, message):
        if self.log_format == "json":
            return self._format_json(level, message)
        return self._format_text(level, message)

    def _log_to_console(self, formatted, level):
        if not self.log_to_console:
            return
        if self.color_output and self.log_format == "text":
            color = self.LOG_COLORS.get(level.upper(), "")
            reset = self.LOG_COLORS.get("RESET", "")
            print(f"{color}{formatted}{reset}", file=self.stream or sys.stderr)
        else:
            print(formatted, file=self.stream or sys.stderr)

    def _should_log(self, level):
        return self.LEVELS.get(level.lower(), 0) >= self.min_level

    def log(self, level, message):
        level = level.upper()
        if not self._should_log(level):
            return

        formatted = self._format_message(level, message)
        with self._lock:
            self._log_to_console(formatted, level)
            self._write_file(self.log_file, formatted)

    def debug(self, message):
        self.log("DEBUG", message)

    def info(self, message):
        self.log("INFO", message)

    def success(self, message):
        self.log("SUCCESS", message)

    def warning(self, message):
        self.log("WARNING", message)

    def error(self, message):
        self.log("ERROR", message)


_loggers = {}


def get_logger(name="depgraph"):
    """Retorna um Logger compartilhado por nome."""
    if name not in _loggers:
        _loggers[name] = Logger(name)
    return _loggers[name]


def set_level(level):
    """Ajusta o nível de todos os loggers já criados e dos próximos."""
    config.config.set("logging", "level", str(level).lower())
    for lg in _loggers.values():
        lg.set_level(level)
