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

# Scalar recurrences written with plain floats and lists. They serve as golden
# traces for the tensor implementations.

import math

from adaptsptk.modules.mlsadf import get_pade_coefficients


def floor(power, min_epsilon):
    return min_epsilon if power < min_epsilon else power


class MLSA:
    def __init__(self, M, alpha, pade_order):
        self.M = M
        self.a = alpha
        self.L = pade_order
        self.pade = get_pade_coefficients(pade_order)
        self.d1 = [0.0] * (pade_order + 1)
        self.p1 = [0.0] * (pade_order + 1)
        self.d2 = [[0.0] * (M + 2) for _ in range(pade_order)]
        self.p2 = [0.0] * (pade_order + 1)

    def fir(self, x, b, d):
        a = self.a
        d[0] = x
        d[1] = (1 - a * a) * d[0] + a * d[1]
        for i in range(2, self.M + 1):
            d[i] += a * (d[i + 1] - d[i - 1])
        y = 0.0
        for i in range(2, self.M + 1):
            y += d[i] * b[i]
        for i in range(self.M + 1, 1, -1):
            d[i] = d[i - 1]
        return y

    def __call__(self, x, b):
        a = self.a
        x *= math.exp(b[0])
        if self.M == 0:
            return x

        y = 0.0
        for i in range(self.L, 0, -1):
            self.d1[i] = (1 - a * a) * self.p1[i - 1] + a * self.d1[i]
            self.p1[i] = self.d1[i] * b[1]
            v = self.p1[i] * self.pade[i]
            x = x + v if i % 2 == 1 else x - v
            y += v
        self.p1[0] = x
        x = y + x

        y = 0.0
        for i in range(self.L, 0, -1):
            self.p2[i] = self.fir(self.p2[i - 1], b, self.d2[i - 1])
            v = self.p2[i] * self.pade[i]
            x = x + v if i % 2 == 1 else x - v
            y += v
        self.p2[0] = x
        return y + x


def amcep(
    x,
    M,
    alpha=0,
    pade_order=4,
    min_epsilon=1e-16,
    momentum=0.9,
    forgetting_factor=0.98,
    step_size_factor=0.1,
):
    mlsa = MLSA(M, alpha, pade_order)
    b = [0.0] * (M + 1)
    phi = [0.0] * (M + 1)
    g = [0.0] * M
    prev_e = 0.0
    eps = 0.0

    es, mcs, epss = [], [], []
    for x_t in x:
        e = mlsa(float(x_t), [0.0] + [-v for v in b[1:]])

        if 0 < M:
            phi[0] = alpha * phi[0] + (1 - alpha * alpha) * prev_e
            for i in range(1, M):
                phi[i] += alpha * (phi[i + 1] - phi[i - 1])
            for i in range(M, 0, -1):
                phi[i] = phi[i - 1]

        eps = floor(
            forgetting_factor * eps + (1 - forgetting_factor) * (e * e), min_epsilon
        )

        if 0 < M:
            sigma = 2 * (1 - momentum) * e
            mu = step_size_factor / (M * eps)
            for i in range(M):
                g[i] = momentum * g[i] - sigma * phi[i + 1]
                b[i + 1] -= mu * g[i]
        b[0] = 0.5 * math.log(eps)
        prev_e = e

        es.append(e)
        mcs.append([b[m] + alpha * b[m + 1] for m in range(M)] + [b[M]])
        epss.append(eps)
    return es, mcs, epss


def agcep(
    x,
    M,
    num_stage=1,
    min_epsilon=1e-16,
    momentum=0.9,
    forgetting_factor=0.98,
    step_size_factor=0.1,
    gain_forgetting_factor=None,
    naive_regressor=False,
):
    if gain_forgetting_factor is None:
        gain_forgetting_factor = forgetting_factor
    gamma = -1 / num_stage
    c = [0.0] * (M + 1)
    d = [[0.0] * M for _ in range(num_stage)]
    g = [0.0] * M
    eps = 0.0
    adjusted = 0.0

    es, gcs, epss = [], [], []
    for x_t in x:
        last = d[-1][M - 1] if 0 < M else 0.0

        v = float(x_t)
        for s in range(num_stage):
            y = 0.0
            for j in range(M):
                y += c[j + 1] * d[s][j]
            if 0 < M:
                d[s] = [v] + d[s][:-1]
            v = v + gamma * y
        e = v

        e_gamma = d[-1][0] if 0 < M else e
        eps = floor(
            forgetting_factor * eps + (1 - forgetting_factor) * (e_gamma * e_gamma),
            min_epsilon,
        )

        if 0 < M:
            f = d[-1][1:] + [d[-1][M - 1] if naive_regressor else last]
            sigma = 2 * (1 - momentum) * e
            mu = step_size_factor / (M * eps)
            for i in range(M):
                g[i] = momentum * g[i] - sigma * f[i]
                c[i + 1] -= mu * g[i]

        adjusted = floor(
            gain_forgetting_factor * adjusted + (1 - gain_forgetting_factor) * (e * e),
            min_epsilon,
        )
        c[0] = math.sqrt(adjusted)

        z = c[0] ** gamma
        es.append(e)
        gcs.append([(z - 1) / gamma] + [v * z for v in c[1:]])
        epss.append(eps)
    return es, gcs, epss
