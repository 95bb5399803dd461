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

import dataclasses
from itertools import islice

import numpy as np
import torch

from adaptsptk.modules.base import BaseBuffer


def choice(is_module, module, func, params={}):
    if is_module:
        return module(**params)

    filtered_params = dict(params)
    if module._takes_input_size():
        filtered_params = dict(islice(filtered_params.items(), 1, None))

    def f(*args, **kwargs):
        return func(*args, **filtered_params, **kwargs)

    return f


def allclose(a, b, rtol=None, atol=None, dtype=None, factor=1):
    is_double = dtype == torch.double
    if rtol is None:
        rtol = (1e-5 if is_double else 1e-4) * factor
    if atol is None:
        atol = (1e-8 if is_double else 1e-6) * factor
    return np.allclose(a, b, rtol=rtol, atol=atol)


def run(module, x, buffer=None):
    if buffer is None:
        buffer = module.Buffer()
    e = []
    c = []
    for x_t in x:
        e_t, c_t = module.step(float(x_t), buffer)
        e.append(e_t)
        c.append(c_t.tolist())
    return np.array(e), np.array(c), buffer


def assert_buffer_equal(a, b):
    assert type(a) is type(b)
    for field in dataclasses.fields(a):
        x = getattr(a, field.name)
        y = getattr(b, field.name)
        if isinstance(x, BaseBuffer):
            assert_buffer_equal(x, y)
        elif torch.is_tensor(x):
            assert torch.is_tensor(y), field.name
            assert torch.equal(x, y), field.name
        else:
            assert x == y, field.name
