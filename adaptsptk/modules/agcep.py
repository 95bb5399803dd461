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

import math
from dataclasses import dataclass

import torch

from ..errors import ConfigurationError
from ..utils.private import check_shape, get_gamma, split_gain
from .adaptive import BaseAdaptiveModule, PowerTracker
from .base import BaseBuffer
from .ignorm import GeneralizedCepstrumInverseGainNormalization


class CascadeAllZeroFilter:
    """Cascade of all-zero digital filters sharing one set of coefficients.

    Each stage feeds its input to its own delay line and passes
    :math:`x + \\gamma y` to the next stage, where :math:`y` is the weighted sum
    of the delayed samples.

    Parameters
    ----------
    order : int >= 0
        The order of the generalized cepstrum, :math:`M`.

    num_stage : int >= 1
        The number of stages, :math:`C`. The gamma is :math:`-1/C`.

    """

    def __init__(self, order: int, num_stage: int) -> None:
        self.order = order
        self.num_stage = num_stage
        self.gamma = get_gamma(0, num_stage)

    def __call__(
        self, x: float, c: list[float], d: list[list[float]]
    ) -> tuple[float, float]:
        """Filter one sample and update the delay lines in place.

        Parameters
        ----------
        x : float
            The input sample.

        c : list[float] [shape=(M,)]
            The normalized generalized cepstrum without the gain.

        d : list[list[float]] [shape=(C, M)]
            The delay lines.

        Returns
        -------
        e : float
            The output of the last stage, i.e., the prediction error.

        last_e : float
            The oldest sample of the last stage before the update.

        """
        M = self.order
        last_e = d[-1][-1] if 0 < M else 0.0

        for s in range(self.num_stage):
            ds = d[s]
            y = 0.0
            for j in range(M - 1, 0, -1):
                y = y + c[j] * ds[j]
                ds[j] = ds[j - 1]
            if 0 < M:
                y = y + c[0] * ds[0]
                ds[0] = x
            x = x + y * self.gamma
        return x, last_e

    def regressor(self, d: list[list[float]], last_e: float) -> list[float]:
        """Gather the gradient direction from the last stage.

        Parameters
        ----------
        d : list[list[float]] [shape=(C, M)]
            The delay lines after filtering.

        last_e : float
            The oldest sample of the last stage before filtering.

        Returns
        -------
        out : list[float] [shape=(M,)]
            The gradient direction.

        """
        M = self.order
        f = [0.0] * M
        for m in range(M):
            if m == M - 1:
                # The tap at offset M has been shifted out of the last stage.
                f[m] = last_e
            else:
                f[m] = d[-1][m + 1]
        return f


class AdaptiveGeneralizedCepstralAnalysis(BaseAdaptiveModule):
    """Adaptive generalized cepstral analysis. The normalized generalized cepstrum
    is updated every sample so that the output of the cascaded all-zero filters
    becomes white.

    Parameters
    ----------
    cep_order : int >= 0
        The order of the generalized cepstrum, :math:`M`.

    num_stage : int >= 1
        The number of stages, :math:`C`. The gamma is :math:`-1/C`.

    min_epsilon : float > 0
        The lower bound of the power of the prediction error, :math:`\\epsilon_{min}`.

    momentum : float in [0, 1)
        The momentum of the gradient, :math:`\\tau`.

    forgetting_factor : float in [0, 1)
        The forgetting factor of the power estimate, :math:`\\lambda`.

    step_size_factor : float in (0, 1)
        The step-size factor, :math:`a`.

    gain_forgetting_factor : float in [0, 1) or None
        The forgetting factor of the gain estimate. If None, `forgetting_factor` is
        used.

    frame_period : int >= 1
        The output period of the generalized cepstrum in :func:`forward`, :math:`P`.

    average : bool
        If True, :func:`forward` outputs the average generalized cepstrum over each
        frame period instead of the last one.

    verbose : bool or int
        If 1, logs the analysis; if 2, also shows a progress bar.

    References
    ----------
    .. [1] K. Tokuda et al., "Adaptive cepstral analysis of speech," *IEEE
           Transactions on Speech and Audio Processing*, vol. 3, no. 6, pp. 481-489,
           1995.

    """

    @dataclass
    class Buffer(BaseBuffer):
        c: torch.Tensor | None = None
        d: torch.Tensor | None = None
        gradient: torch.Tensor | None = None
        epsilon: float = 0.0
        adjusted_error: float = 0.0

    def __init__(
        self,
        cep_order: int,
        *,
        num_stage: int = 1,
        min_epsilon: float = 1e-16,
        momentum: float = 0.9,
        forgetting_factor: float = 0.98,
        step_size_factor: float = 0.1,
        gain_forgetting_factor: float | None = None,
        frame_period: int = 1,
        average: bool = False,
        verbose: bool | int = False,
    ) -> None:
        super().__init__(
            cep_order,
            min_epsilon,
            momentum,
            forgetting_factor,
            step_size_factor,
            frame_period,
            average,
            verbose,
        )

        if num_stage <= 0:
            raise ConfigurationError("num_stage must be positive.")
        if gain_forgetting_factor is None:
            gain_forgetting_factor = forgetting_factor
        if not 0 <= gain_forgetting_factor < 1:
            raise ConfigurationError("gain_forgetting_factor must be in [0, 1).")

        self.num_stage = num_stage
        self.gain_forgetting_factor = gain_forgetting_factor
        self.cascade = CascadeAllZeroFilter(cep_order, num_stage)
        self.gain_power = PowerTracker(gain_forgetting_factor, min_epsilon)
        self.ignorm = GeneralizedCepstrumInverseGainNormalization(
            cep_order, c=num_stage
        )

    def new_buffer(self) -> "AdaptiveGeneralizedCepstralAnalysis.Buffer":
        M = self.cep_order
        return self.Buffer(
            is_ready=True,
            c=torch.zeros(M + 1, dtype=torch.double),
            d=torch.zeros(self.num_stage, M, dtype=torch.double),
            gradient=torch.zeros(M, dtype=torch.double),
        )

    def check_buffer(
        self, buffer: "AdaptiveGeneralizedCepstralAnalysis.Buffer"
    ) -> None:
        M = self.cep_order
        check_shape(buffer.c, (M + 1,), "normalized generalized cepstrum")
        check_shape(buffer.d, (self.num_stage, M), "delay lines")
        check_shape(buffer.gradient, (M,), "gradient")

    def _step(
        self, x: float, buffer: "AdaptiveGeneralizedCepstralAnalysis.Buffer"
    ) -> tuple[float, torch.Tensor]:
        _, c1 = split_gain(buffer.c)
        c1 = c1.tolist()
        d = buffer.d.tolist()
        gradient = buffer.gradient.tolist()

        e, last_e = self.cascade(x, c1, d)

        # The input of the last stage drives the power estimate.
        e_gamma = d[-1][0] if 0 < self.cep_order else e
        epsilon = self.power(buffer.epsilon, e_gamma)

        if 0 < self.cep_order:
            f = self.cascade.regressor(d, last_e)
            self.sgd(gradient, c1, e, f, epsilon)

        adjusted_error = self.gain_power(buffer.adjusted_error, e)

        buffer.c = torch.tensor([math.sqrt(adjusted_error)] + c1, dtype=torch.double)
        buffer.d = torch.tensor(d, dtype=torch.double)
        buffer.gradient = torch.tensor(gradient, dtype=torch.double)
        buffer.epsilon = epsilon
        buffer.adjusted_error = adjusted_error

        gc = self._collaborate(self.ignorm, buffer.c, name="ignorm")
        return e, gc

    def extra_repr(self) -> str:
        return f"{super().extra_repr()}, num_stage={self.num_stage}"
