# Copyright 2018 ICON Foundation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Output of the `kwiltx` logger, taken from `configure` when the package is imported.

    KWILTX_LOG_LEVEL=SPAM LOG_OUTPUT_TYPE="console|file" python app.py
"""

import logging
import os
import sys

import coloredlogs

from kwiltx import configure as conf

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogConfiguration:
    def __init__(self):
        self.log_level = conf.KWILTX_LOG_LEVEL
        self.log_format = conf.LOG_FORMAT
        self.log_color = conf.LOG_COLOR
        self.log_output_type = conf.LOG_OUTPUT_TYPE
        self.chain_id = conf.KWIL_CHAIN_ID

        self.log_file_location = conf.LOG_FILE_LOCATION
        self.log_file_prefix = conf.LOG_FILE_PREFIX
        self.log_file_extension = conf.LOG_FILE_EXTENSION

    @property
    def log_file_path(self):
        chain_suffix = f".{self.chain_id}".replace("/", "_") if self.chain_id else ""
        log_file_name = f"{self.log_file_prefix}{chain_suffix}.{self.log_file_extension}"
        return os.path.join(self.log_file_location, log_file_name)

    def update_logger(self, logger: logging.Logger):
        """Replace the handlers of `logger` with the configured outputs."""
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

        log_format = self.log_format.format(CHAIN_ID=self.chain_id)

        if self.log_output_type & conf.LogOutputType.console:
            stream_handler = logging.StreamHandler(sys.stderr)
            if self.log_color:
                stream_handler.setFormatter(coloredlogs.ColoredFormatter(fmt=log_format, datefmt=DATE_FORMAT))
            else:
                stream_handler.setFormatter(logging.Formatter(fmt=log_format, datefmt=DATE_FORMAT))
            logger.addHandler(stream_handler)

        if self.log_output_type & conf.LogOutputType.file:
            os.makedirs(self.log_file_location, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file_path, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(fmt=log_format, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)

        logger.setLevel(self.log_level)


def update_logger(logger: logging.Logger):
    LogConfiguration().update_logger(logger)
