# swarmviz/utils/logging.py
import logging
from typing import Any, Dict, List, Optional

from colorama import init, Fore, Back, Style
from tabulate import tabulate

# Initialize colorama
init(autoreset=True)

LOG_FORMAT = "[%(asctime)s] %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ColorFormatter(logging.Formatter):
    COLORS = {
        'INFO': Fore.CYAN,
        'DEBUG': Fore.BLUE,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Back.RED + Fore.WHITE
    }

    def format(self, record):
        # copy so the file handler still sees the plain record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, Fore.WHITE)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        record.name = f"{Fore.MAGENTA}{record.name}{Style.RESET_ALL}"
        return super().format(record)


def get_logger(name: str = "swarmviz", level: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)

    # Console handler with color
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    # File handler (no color)
    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def _colorize(key: str, value: Any) -> str:
    if key == "algorithm":
        return f"{Fore.CYAN}{value}{Style.RESET_ALL}"
    if key == "best_score" and isinstance(value, (int, float)):
        return f"{Fore.BLUE}{value:.4f}{Style.RESET_ALL}"
    if key == "time" and isinstance(value, (int, float)):
        return f"{Fore.MAGENTA}{value:.2f}s{Style.RESET_ALL}"
    if key == "status":
        color = Fore.GREEN if value == "ok" else Fore.YELLOW if value == "stopped" else Fore.RED
        return f"{color}{value}{Style.RESET_ALL}"
    return str(value)


def print_results_table(results: List[Dict[str, Any]], title: str = "RESULTS") -> None:
    """Print a table of run summaries, one row per dict."""
    print(f"\n{Fore.CYAN}{'═' * 60}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{title:^60}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{'═' * 60}{Style.RESET_ALL}")

    if not results:
        print(f"{Fore.YELLOW}No results to display{Style.RESET_ALL}")
        return

    headers = list(results[0].keys())
    rows = [[_colorize(k, r.get(k, "")) for k in headers] for r in results]
    print(tabulate(rows, headers=headers, tablefmt="simple_grid"))


def print_experiment_header(name: str, run_num: int, total_runs: int) -> None:
    print(f"\n{Fore.GREEN}{'─' * 60}{Style.RESET_ALL}")
    print(f"{Fore.GREEN}Experiment {run_num}/{total_runs}: {name}{Style.RESET_ALL}")
    print(f"{Fore.GREEN}{'─' * 60}{Style.RESET_ALL}")
