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

import pytest
import torch

import adaptsptk
import tests.utils as U


@pytest.mark.parametrize("module", [False, True])
@pytest.mark.parametrize("gamma", [0, -0.5, 1])
def test_compatibility(module, gamma, M=4, B=2):
    ignorm = U.choice(
        module,
        adaptsptk.GeneralizedCepstrumInverseGainNormalization,
        adaptsptk.functional.ignorm,
        {"cep_order": M, "gamma": gamma},
    )

    y = adaptsptk.nrand(B * (M + 1) - 1, seed=1, dtype=torch.double).reshape(B, M + 1)
    y[:, 0] = torch.tensor([0.5, 2.0])
    x = ignorm(y)

    for i in range(B):
        K = y[i, 0].item()
        if gamma == 0:
            target = [math.log(K)] + y[i, 1:].tolist()
        else:
            z = K**gamma
            target = [(z - 1) / gamma] + [v * z for v in y[i, 1:].tolist()]
        assert U.allclose(x[i], target, dtype=torch.double)


@pytest.mark.parametrize("c", [1, 2, 4])
def test_number_of_stages(c, M=3):
    y = torch.tensor([0.3, 0.1, -0.2, 0.4], dtype=torch.double)
    x1 = adaptsptk.GeneralizedCepstrumInverseGainNormalization(M, c=c)(y)
    x2 = adaptsptk.functional.ignorm(y, gamma=-1 / c)
    assert torch.equal(x1, x2)


def test_unit_gain(M=3):
    ignorm = adaptsptk.GeneralizedCepstrumInverseGainNormalization(M, c=2)
    y = adaptsptk.ramp(1, 4)
    assert U.allclose(ignorm(y), [0, 2, 3, 4])


def test_invalid():
    with pytest.raises(ValueError):
        adaptsptk.GeneralizedCepstrumInverseGainNormalization(-1)
    with pytest.raises(ValueError):
        adaptsptk.GeneralizedCepstrumInverseGainNormalization(2, gamma=1.5)
    with pytest.raises(ValueError):
        adaptsptk.GeneralizedCepstrumInverseGainNormalization(2, c=0)
