# ------------------------------------------------------------------------ #
# Copyright 2022 SPTK Working Group                                        #
#                                                                          #
# Licensed under the Apache License, Version 2.0 (the "License");          #
# you may not use this file except in compliance with the License.         #
# You may obtain a copy of the License at                                  #
#                                                                          #
#     http://www.apache.org/licenses/LICENSE-2.0                           #
#                                                                          #
# Unless required by applicable law or agreed to in writing, software      #
# distributed under the License is distributed on an "AS IS" BASIS,        #
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. #
# See the License for the specific language governing permissions and      #
# limitations under the License.                                           #
# ------------------------------------------------------------------------ #

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields

import torch
from torch import nn


class BaseNonFunctionalModule(ABC, nn.Module):
    pass


class BaseFunctionalModule(ABC, nn.Module):
    @staticmethod
    @abstractmethod
    def _func(*args, **kwargs):
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def _takes_input_size():
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def _check(*args, **kwargs):
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def _precompute(*args, **kwargs):
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def _forward(*args, **kwargs):
        raise NotImplementedError


@dataclass
class BaseBuffer:
    """Mutable state of one stream.

    A buffer is allocated lazily by the module that owns it. Until then
    ``is_ready`` is False and any content is ignored.
    """

    is_ready: bool = False

    def clone(self) -> "BaseBuffer":
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if torch.is_tensor(value):
                value = value.clone()
            elif isinstance(value, BaseBuffer):
                value = value.clone()
            values[f.name] = value
        return type(self)(**values)

    def commit(self, other: "BaseBuffer") -> None:
        if type(other) is not type(self):
            raise TypeError(f"Cannot commit {type(other).__name__} to {type(self)}.")
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))
