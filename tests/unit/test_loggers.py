import logging
import os
import tempfile

import coloredlogs
import verboselogs

from kwiltx import configure as conf
from kwiltx import utils
from kwiltx.utils.loggers import LogConfiguration


def test_package_logger_is_configured_on_import():
    assert utils.logger.level == logging.getLevelName(conf.KWILTX_LOG_LEVEL)
    assert len(utils.logger.handlers) == 1


def test_console_output():
    logger = verboselogs.VerboseLogger("test_console")
    log_configuration = LogConfiguration()
    log_configuration.log_level = "SPAM"
    log_configuration.log_output_type = conf.LogOutputType.console

    log_configuration.update_logger(logger)
    log_configuration.update_logger(logger)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, coloredlogs.ColoredFormatter)
    assert logger.level == verboselogs.SPAM


def test_file_output():
    logger = verboselogs.VerboseLogger("test_file")
    with tempfile.TemporaryDirectory() as temp_dir:
        log_configuration = LogConfiguration()
        log_configuration.log_level = "DEBUG"
        log_configuration.log_color = False
        log_configuration.chain_id = "kwil/testnet"
        log_configuration.log_output_type = conf.LogOutputType.file
        log_configuration.log_file_location = temp_dir

        log_configuration.update_logger(logger)
        logger.debug("written to file")

        log_file_path = os.path.join(temp_dir, "kwiltx.kwil_testnet.log")
        assert log_configuration.log_file_path == log_file_path
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        with open(log_file_path, encoding='utf-8') as log_file:
            assert "written to file" in log_file.read()


def test_no_output():
    logger = verboselogs.VerboseLogger("test_none")
    log_configuration = LogConfiguration()
    log_configuration.log_output_type = conf.LogOutputType(0)

    log_configuration.update_logger(logger)

    assert not logger.handlers
