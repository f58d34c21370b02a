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
"""Default configuration of kwiltx.

Every name here can be overridden by an environment variable of the same name,
see `kwiltx.configure`.
"""

from enum import IntEnum, IntFlag, auto


#############
# LOGGING ###
#############
class LogOutputType(IntFlag):
    console = auto()
    file = auto()


# Level of the `kwiltx` logger. SPAM shows every build step.
KWILTX_LOG_LEVEL = "INFO"
LOG_COLOR = True
LOG_FORMAT = "%(asctime)s,%(msecs)03d %(process)d %(thread)d {CHAIN_ID} " \
             "%(levelname)s %(filename)s(%(lineno)d) %(message)s"

LOG_OUTPUT_TYPE = LogOutputType.console

LOG_FILE_LOCATION = "log"
LOG_FILE_PREFIX = "kwiltx"
LOG_FILE_EXTENSION = "log"


##############
# PROVIDER ###
##############
class ApiVersion(IntEnum):
    v1 = 1
    rpc = 2


KWIL_PROVIDER = "http://localhost:8484"
KWIL_CHAIN_ID = ""
KWIL_API_VERSION = ApiVersion.v1

# Timeout (seconds) of a single REST or JSON-RPC call.
REST_TIMEOUT = 10


#################
# TRANSACTION ###
#################
# Bytes of random salt appended to every body before signing.
TX_SALT_SIZE = 16
HTTP_STATUS_OK = 200
