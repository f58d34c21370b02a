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
"""Configuration of kwiltx.

Values of `configure_default` are published here, each replaced by the
environment variable of the same name when it is set. Use it as a module:

    from kwiltx import configure as conf
    conf.KWIL_PROVIDER
"""

import logging
import os
from enum import Enum, IntFlag
from functools import reduce
from operator import or_

import kwiltx.configure_default
from kwiltx.configure_default import *


class ConfigureMetaClass(type):
    """A class which uses this as metaclass becomes a singleton."""
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(ConfigureMetaClass, cls).__call__(*args, **kwargs)

        return cls._instances[cls]


class Configure(metaclass=ConfigureMetaClass):
    def __init__(self):
        self.init_configure()

    def init_configure(self):
        """(Re)load every default, applying environment overrides."""
        for name in dir(kwiltx.configure_default):
            default = getattr(kwiltx.configure_default, name)
            if name.startswith('_') or not isinstance(default, (str, int, float)):
                continue

            env_value = os.getenv(name)
            globals()[name] = default if env_value is None else _from_env(name, env_value, default)


def _from_env(name: str, env_value: str, default):
    try:
        # bool and enums are ints too, so they are checked first.
        if isinstance(default, bool):
            return env_value.lower() in ("1", "true", "yes")
        if isinstance(default, IntFlag):
            if env_value.isnumeric():
                return type(default)(int(env_value))
            return reduce(or_, (type(default)[flag.strip().lower()] for flag in env_value.split('|')))
        if isinstance(default, Enum):
            return type(default)(int(env_value)) if env_value.isnumeric() else type(default)[env_value]
        if isinstance(default, str):
            return env_value
        return type(default)(env_value)
    except (KeyError, ValueError) as e:
        logging.warning(f"Invalid value of {name}({env_value}), default({default}) is used: {e}")
        return default


Configure()
