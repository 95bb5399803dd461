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

import torch

__all__ = ["impulse", "step", "ramp", "nrand"]


def impulse(order: int, **kwargs) -> torch.Tensor:
    """Generate impulse sequence.

    Parameters
    ----------
    order : int >= 0
        The order of the sequence, :math:`M`.

    **kwargs : additional keyword arguments
        See `torch.eye <https://pytorch.org/docs/stable/generated/torch.eye.html>`_.

    Returns
    -------
    out : Tensor [shape=(M+1,)]
        The impulse sequence.

    Examples
    --------
    >>> import adaptsptk
    >>> x = adaptsptk.impulse(4)
    >>> x
    tensor([1., 0., 0., 0., 0.])

    """
    return torch.eye(n=1, m=order + 1, **kwargs).squeeze(0)


def step(order: int, value: float = 1, **kwargs) -> torch.Tensor:
    """Generate step sequence.

    Parameters
    ----------
    order : int >= 0
        The order of the sequence, :math:`M`.

    value : float
        The step value.

    **kwargs : additional keyword arguments
        See `torch.full <https://pytorch.org/docs/stable/generated/torch.full.html>`_.

    Returns
    -------
    out : Tensor [shape=(M+1,)]
        The step sequence.

    """
    return torch.full((order + 1,), float(value), **kwargs)


def ramp(
    arg: float, end: float | None = None, step: float = 1, eps: float = 1e-8, **kwargs
) -> torch.Tensor:
    """Generate ramp sequence.

    Parameters
    ----------
    arg : float
        If `end` is `None`, this is the end value otherwise start value.

    end : float or None
        The end value.

    step : float != 0
        The slope.

    eps : float
        A correction value.

    **kwargs : additional keyword arguments
        See `torch.arange
        <https://pytorch.org/docs/stable/generated/torch.arange.html>`_.

    Returns
    -------
    out : Tensor [shape=(?,)]
        The ramp sequence.

    """
    if end is None:
        start = 0
        end = arg
    else:
        start = arg
    if 0 < step:
        end += eps
    elif step < 0:
        end -= eps
    else:
        raise ValueError("step must be non-zero")
    return torch.arange(start, end, step, **kwargs)


def nrand(
    order: int, mean: float = 0, stdv: float = 1, seed: int | None = None, **kwargs
) -> torch.Tensor:
    """Generate Gaussian random number sequence.

    Parameters
    ----------
    order : int >= 0
        The order of the sequence, :math:`M`.

    mean : float
        The mean.

    stdv : float >= 0
        The standard deviation.

    seed : int or None
        The random seed. If given, the sequence is reproducible.

    **kwargs : additional keyword arguments
        See `torch.randn <https://pytorch.org/docs/stable/generated/torch.randn.html>`_.

    Returns
    -------
    out : Tensor [shape=(M+1,)]
        The random value sequence.

    """
    if stdv < 0:
        raise ValueError("stdv must be non-negative.")
    if seed is not None:
        generator = torch.Generator()
        generator.manual_seed(seed)
        kwargs["generator"] = generator
    x = torch.randn(order + 1, **kwargs)
    return x * stdv + mean
