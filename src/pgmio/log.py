import argparse
import logging


class Log:
    """
    Thin static facade over the package logger, so modules can simply call `Log.debug(...)`.
    """

    NAME = 'pgmio'
    FORMAT = '%(asctime)s %(levelname)-8s %(message)s'
    LEVELS = ['debug', 'info', 'warning', 'error']

    _logger = logging.getLogger(NAME)

    @staticmethod
    def add_args(parser: argparse.ArgumentParser):
        parser.add_argument('--log-level', '-l', type=str, default='info', choices=Log.LEVELS,
                            help='Minimum level of the log messages to print')

    @staticmethod
    def setup(args):
        logging.basicConfig(format=Log.FORMAT, level=getattr(logging, args.log_level.upper()))

    @staticmethod
    def debug(message: str):
        Log._logger.debug(message)

    @staticmethod
    def info(message: str):
        Log._logger.info(message)

    @staticmethod
    def warning(message: str):
        Log._logger.warning(message)

    @staticmethod
    def error(message: str):
        Log._logger.error(message)
