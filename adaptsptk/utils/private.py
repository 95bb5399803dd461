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

import logging
from typing import Any

import numpy as np
import torch


def filter_values(
    dictionary: dict[str, Any], drop_keys: list[str] | None = None
) -> dict[str, Any]:
    new_dictionary = {}
    for key, value in dictionary.items():
        if key in ("self", "__class__"):
            continue
        if drop_keys is not None and key in drop_keys:
            continue
        new_dictionary[key] = value
    return new_dictionary


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s (%(module)s:%(lineno)d) %(levelname)s: %(message)s"
    )
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def check_size(x: int, y: int, cause: str) -> None:
    if x != y:
        raise ValueError(f"Unexpected {cause} (input {x} vs target {y}).")


def to(
    x: torch.Tensor | np.ndarray,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    if dtype is None:
        dtype = torch.get_default_dtype()
    if isinstance(x, np.ndarray):
        x = torch.from_numpy(x)
    return x.to(device=device, dtype=dtype)


def split_gain(c: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
    """Split coefficients into the gain term and the shape terms.

    Parameters
    ----------
    c : Tensor [shape=(..., M+1)]
        The coefficients whose 0-th element is the gain.

    Returns
    -------
    gain : Tensor [shape=(..., 1)]
        The gain term.

    shape : Tensor [shape=(..., M)]
        The shape terms.

    """
    gain, shape = torch.split(c, [1, c.size(-1) - 1], dim=-1)
    return gain, shape


def get_gamma(gamma: float, c: int | None) -> float:
    if c is None or c == 0:
        return gamma
    if not 1 <= c:
        raise ValueError("c must be an integer greater than or equal to 1.")
    return -1 / c


def check_shape(x: torch.Tensor | None, shape: tuple[int, ...], name: str) -> None:
    if x is None or tuple(x.shape) != shape:
        actual = None if x is None else tuple(x.shape)
        raise ValueError(f"Unexpected shape of {name} (input {actual} vs {shape}).")
