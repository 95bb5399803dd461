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

import numbers
from abc import abstractmethod

import numpy as np
import torch
from tqdm import tqdm

from ..errors import ArgumentError, CollaboratorError, ConfigurationError
from ..typing import Scalar, Signal
from ..utils.private import get_logger, to
from .base import BaseBuffer, BaseNonFunctionalModule


class PowerTracker:
    """Exponentially weighted power of a signal with a lower bound.

    Parameters
    ----------
    forgetting_factor : float in [0, 1)
        The forgetting factor, :math:`\\lambda`.

    min_epsilon : float > 0
        The lower bound of the power.

    """

    def __init__(self, forgetting_factor: float, min_epsilon: float) -> None:
        self.forgetting_factor = forgetting_factor
        self.min_epsilon = min_epsilon

    def __call__(self, prev_power: float, e: float) -> float:
        power = (self.forgetting_factor * prev_power) + (
            1 - self.forgetting_factor
        ) * (e * e)
        if power < self.min_epsilon:
            power = self.min_epsilon
        return power


class MomentumGradientDescent:
    """Stochastic gradient step with momentum over the shape coefficients.

    Parameters
    ----------
    order : int >= 1
        The number of shape coefficients, :math:`M`.

    momentum : float in [0, 1)
        The momentum, :math:`\\tau`.

    step_size_factor : float in (0, 1)
        The step-size factor, :math:`a`.

    """

    def __init__(self, order: int, momentum: float, step_size_factor: float) -> None:
        self.order = order
        self.momentum = momentum
        self.step_size_factor = step_size_factor

    def __call__(
        self,
        gradient: list[float],
        c: list[float],
        e: float,
        regressor: list[float],
        epsilon: float,
    ) -> None:
        """Update the gradient and the coefficients in place.

        Parameters
        ----------
        gradient : list[float] [shape=(M,)]
            The momentum state.

        c : list[float] [shape=(M,)]
            The shape coefficients.

        e : float
            The current prediction error.

        regressor : list[float] [shape=(M,)]
            The gradient direction.

        epsilon : float
            The current power of the prediction error.

        """
        sigma = 2 * (1 - self.momentum) * e
        mu = self.step_size_factor / (self.order * epsilon)
        for m in range(self.order):
            gradient[m] = self.momentum * gradient[m] - sigma * regressor[m]
            c[m] -= mu * gradient[m]


class BaseAdaptiveModule(BaseNonFunctionalModule):
    """Base class of the sample-by-sample adaptive cepstral analyses.

    A module holds configuration only. All the state of a stream lives in a
    buffer that is passed to :func:`step` explicitly, so one module can
    analyze any number of independent streams.
    """

    Buffer = BaseBuffer

    def __init__(
        self,
        cep_order: int,
        min_epsilon: float,
        momentum: float,
        forgetting_factor: float,
        step_size_factor: float,
        frame_period: int,
        average: bool,
        verbose: bool | int,
    ) -> None:
        super().__init__()

        if cep_order < 0:
            raise ConfigurationError("cep_order must be non-negative.")
        if min_epsilon <= 0:
            raise ConfigurationError("min_epsilon must be positive.")
        if not 0 <= momentum < 1:
            raise ConfigurationError("momentum must be in [0, 1).")
        if not 0 <= forgetting_factor < 1:
            raise ConfigurationError("forgetting_factor must be in [0, 1).")
        if not 0 < step_size_factor < 1:
            raise ConfigurationError("step_size_factor must be in (0, 1).")
        if frame_period <= 0:
            raise ConfigurationError("frame_period must be positive.")

        self.cep_order = cep_order
        self.min_epsilon = min_epsilon
        self.momentum = momentum
        self.forgetting_factor = forgetting_factor
        self.step_size_factor = step_size_factor
        self.frame_period = frame_period
        self.average = average
        self.verbose = verbose

        self.power = PowerTracker(forgetting_factor, min_epsilon)
        self.sgd = (
            MomentumGradientDescent(cep_order, momentum, step_size_factor)
            if 0 < cep_order
            else None
        )

        self.logger = get_logger(type(self).__name__)
        self.hide_progress_bar = self.verbose <= 1

    @abstractmethod
    def new_buffer(self) -> BaseBuffer:
        """Allocate a zero-filled buffer."""
        raise NotImplementedError

    @abstractmethod
    def check_buffer(self, buffer: BaseBuffer) -> None:
        """Raise ValueError if a ready buffer does not fit this module."""
        raise NotImplementedError

    @abstractmethod
    def _step(self, x: float, buffer: BaseBuffer) -> tuple[float, torch.Tensor]:
        raise NotImplementedError

    def step(self, x: Scalar, buffer: BaseBuffer) -> tuple[float, torch.Tensor]:
        """Analyze one sample.

        Parameters
        ----------
        x : float or Tensor or ndarray
            The input sample. Arrays must hold exactly one element.

        buffer : Buffer
            The state of the stream. On the first call it is zero-initialized
            regardless of its content. It is updated only if the call succeeds.

        Returns
        -------
        e : float
            The prediction error.

        c : Tensor [shape=(M+1,)]
            The spectral parameters.

        """
        if buffer is None:
            raise ArgumentError("buffer must be given.")
        if not isinstance(buffer, self.Buffer):
            raise ArgumentError(
                f"buffer must be {self.Buffer.__qualname__}, "
                f"not {type(buffer).__name__}."
            )
        if isinstance(x, np.ndarray):
            if x.size != 1:
                raise ArgumentError("Input must be a single sample.")
            x = x.item()
        elif torch.is_tensor(x):
            if x.numel() != 1:
                raise ArgumentError("Input must be a single sample.")
            x = x.item()
        if not isinstance(x, numbers.Real):
            raise ArgumentError(f"Unsupported input type: {type(x)}.")

        if buffer.is_ready:
            try:
                self.check_buffer(buffer)
            except ValueError as e:
                raise ArgumentError(f"Malformed buffer: {e}") from e
            work = buffer.clone()
        else:
            work = self.new_buffer()

        e, c = self._step(float(x), work)
        buffer.commit(work)
        return e, c

    @staticmethod
    def _collaborate(func, *args, name: str):
        try:
            return func(*args)
        except ValueError as e:
            raise CollaboratorError(f"{name} rejected its input: {e}") from e

    def _log_power(self, buffer: BaseBuffer) -> None:
        self.logger.info(f"  epsilon = {buffer.epsilon:g}")

    def forward(
        self, x: Signal, buffer: BaseBuffer | None = None
    ) -> tuple[torch.Tensor, torch.Tensor]:
        """Analyze a whole waveform sample by sample.

        Parameters
        ----------
        x : Tensor [shape=(T,)]
            The input waveform.

        buffer : Buffer or None
            The state to start from. If None, a new stream is started. If given,
            it is updated in place so that the analysis can be continued.

        Returns
        -------
        e : Tensor [shape=(T,)]
            The prediction error.

        c : Tensor [shape=(T/P, M+1)]
            The spectral parameters at the end of every frame period. If
            ``average`` is True, the average over each frame period.

        """
        dtype = x.dtype if torch.is_tensor(x) else None
        x = to(x, dtype=torch.double)
        if x.dim() != 1:
            raise ValueError("Input waveform must be 1D.")
        if buffer is None:
            buffer = self.Buffer()

        if self.verbose:
            self.logger.info(f"Analyze {len(x)} samples: {self.extra_repr()}")

        P = self.frame_period
        e = []
        c = []
        s = n = 0
        for t in tqdm(range(len(x)), disable=self.hide_progress_bar):
            e_t, c_t = self.step(x[t], buffer)
            e.append(e_t)
            if self.average:
                s = s + c_t
                n += 1
            if (t + 1) % P == 0 or t + 1 == len(x):
                c.append(s / n if self.average else c_t)
                s = n = 0

        if self.verbose:
            self._log_power(buffer)

        e = to(torch.tensor(e, dtype=torch.double), device=x.device, dtype=dtype)
        if 0 < len(c):
            c = torch.stack(c)
        else:
            c = torch.empty(0, self.cep_order + 1, dtype=torch.double)
        c = to(c, device=x.device, dtype=dtype)
        return e, c

    def extra_repr(self) -> str:
        return (
            f"cep_order={self.cep_order}, min_epsilon={self.min_epsilon:g}, "
            f"momentum={self.momentum}, forgetting_factor={self.forgetting_factor}, "
            f"step_size_factor={self.step_size_factor}"
        )
