from semibricks.logger import get_logger

__author__ = """semibricks contributors"""
__version__ = "0.3.0"

log = get_logger("semibricks")
