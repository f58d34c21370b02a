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

from functools import partial

from transitions.extensions import LockedMachine as Machine

import kwiltx.utils as util


class ExceptionNullStatesInMachine(Exception):
    pass


class ExceptionNullInitState(Exception):
    pass


class StateMachine(object):
    """Class decorator. Every instance gets its own `machine`.

    Methods decorated with `transition` become triggers of the same name. The
    body of such a method runs before the state changes and receives the
    trigger arguments. An invalid trigger raises `transitions.MachineError`.
    """

    def __init__(self, arg):
        self.arg = arg

    def __call__(self, cls):
        decorated = {}
        for attr_name in dir(cls):
            attr = getattr(cls, attr_name, None)
            info_dict = getattr(attr, "_info_dict_", None)
            if info_dict:
                decorated[attr_name] = (attr, info_dict)

        class Wrapped(cls):
            attributes = self.arg

            def __init__(self, *cls_args, **cls_kwargs):
                if not hasattr(cls, 'states') or not cls.states:
                    raise ExceptionNullStatesInMachine

                if not hasattr(cls, 'init_state') or not cls.init_state:
                    raise ExceptionNullInitState

                self.machine = Machine(model=self, states=cls.states, initial=cls.init_state,
                                       auto_transitions=False, ignore_invalid_triggers=False)

                cls.__init__(self, *cls_args, **cls_kwargs)

                for trigger_name, (func, info_dict) in decorated.items():
                    info_dict = dict(info_dict)
                    before = info_dict.pop('before', [])
                    before = [before] if isinstance(before, str) or callable(before) else list(before)
                    self.machine.add_transition(trigger_name, before=[partial(func, self)] + before, **info_dict)

                util.logger.spam(f"{self.attributes} initialized in state({self.state})")

        # Triggers are bound by the machine on each instance.
        for trigger_name in decorated:
            setattr(Wrapped, trigger_name, None)

        Wrapped.__name__ = cls.__name__
        Wrapped.__qualname__ = cls.__qualname__
        Wrapped.__doc__ = cls.__doc__
        return Wrapped


def transition(**kwargs_):
    def _transition(func):
        func._info_dict_ = kwargs_
        return func

    return _transition
