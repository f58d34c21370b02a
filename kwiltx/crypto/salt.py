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

import os

from kwiltx import configure as conf
from kwiltx.blockchain.types import Salt


def generate_salt(size: int = None) -> Salt:
    """Fresh random salt for one signing attempt. Never cached."""
    if size is None:
        size = conf.TX_SALT_SIZE
    if size <= 0:
        raise ValueError(f"salt size must be positive. ({size})")

    return Salt(os.urandom(size))
