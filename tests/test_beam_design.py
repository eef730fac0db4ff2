"""Singly and doubly reinforced beam design (WSD and SDM)."""
import math

import pytest

from rcdesign.core.beam_design import design_double_beam, design_single_beam
from rcdesign.core.double_beam import compression_steel_stress
from rcdesign.core.materials import get_beta1
from rcdesign.core.sdm import balanced_ratio
from rcdesign.core.section import calculate_double_section_properties
from rcdesign.models.inputs import (
    BeamInputs, DeformedBar, DoubleBeamInputs, ReinforcementLayer
)
from rcdesign.models.outputs import DesignStatus
from rcdesign.utils.constants import STEEL_MODULUS


def _beam(count, bar=DeformedBar.DB25, width=30, height=50):
    return BeamInputs(
        width=width, height=height, cover=4,
        layers=[ReinforcementLayer(bar_size=bar, count=count)],
    )


@pytest.fixture(scope="module")
def wsd_scenario():
    """30x50 cm, f'c 240, SD40, 3-DB25, RB9 @ 20 cm."""
    return design_single_beam(_beam(3))


class TestSingleBeamWSD:

    def test_allowable_stresses(self, wsd_scenario):
        """fc = 0.45 f'c and fs = 0.5 fy."""
        assert wsd_scenario.wsd.allowable_concrete_stress == pytest.approx(108)
        assert wsd_scenario.wsd.allowable_steel_stress == pytest.approx(2000)

    def test_modular_ratio(self, wsd_scenario):
        """n = Es / (15100 sqrt(f'c)), about 8.72 for f'c 240."""
        assert wsd_scenario.wsd.modular_ratio == pytest.approx(
            2_040_000 / (15100 * math.sqrt(240))
        )

    def test_steel_area(self, wsd_scenario):
        """Three DB25 give 14.727 cm²."""
        assert wsd_scenario.section.total_steel_area == pytest.approx(14.727)

    def test_moment_is_governing_minimum(self, wsd_scenario):
        """The capacity is the lesser of Mc and Ms."""
        wsd = wsd_scenario.wsd
        assert wsd.moment_capacity > 0
        assert wsd.moment_capacity == min(wsd.moment_concrete, wsd.moment_steel)
        assert wsd.governing == ("concrete" if wsd.moment_concrete <= wsd.moment_steel else "steel")

    def test_lever_arm(self, wsd_scenario):
        """j = 1 - k/3 and the lever arm is j d."""
        wsd = wsd_scenario.wsd
        assert wsd.j == pytest.approx(1 - wsd.k / 3)
        assert wsd.lever_arm == pytest.approx(wsd.j * wsd_scenario.section.effective_depth)

    def test_shear_capacity(self, wsd_scenario):
        """Concrete plus two-leg RB9 stirrups at half fy."""
        d = wsd_scenario.section.effective_depth
        expected = 0.29 * math.sqrt(240) * 30 * d + (2 * 0.636 * 0.5 * 4000 * d) / 20
        assert wsd_scenario.wsd.shear_capacity == pytest.approx(expected)

    def test_equation_trace_numbered(self, wsd_scenario):
        """Steps are numbered in order and end at the shear capacity."""
        steps = wsd_scenario.wsd.steps
        assert [s.step_number for s in steps] == list(range(1, len(steps) + 1))
        assert steps[-1].result == pytest.approx(wsd_scenario.wsd.shear_capacity)


class TestSingleBeamSDM:

    def test_balanced_ratio_fc240_sd40(self, wsd_scenario):
        """rho_b = 0.02601 and rho_max = 0.75 rho_b for f'c 240, SD40."""
        assert wsd_scenario.sdm.balanced_ratio == pytest.approx(0.02601, abs=0.0001)
        assert wsd_scenario.sdm.max_ratio == pytest.approx(0.0195075, abs=0.0001)

    def test_balanced_ratio_function(self):
        """The balanced ratio helper matches the tabulated value."""
        assert balanced_ratio(240, 4000, get_beta1(240)) == pytest.approx(0.02601, abs=1e-5)

    def test_design_moment_is_phi_times_nominal(self, wsd_scenario):
        """phi Mn = 0.90 Mn."""
        sdm = wsd_scenario.sdm
        assert sdm.design_moment == 0.90 * sdm.nominal_moment

    def test_design_shear(self, wsd_scenario):
        """phi Vn = 0.85 (Vc + Vs)."""
        sdm = wsd_scenario.sdm
        d = wsd_scenario.section.effective_depth
        Vn = 0.53 * math.sqrt(240) * 30 * d + 2 * 0.636 * 4000 * d / 20
        assert sdm.nominal_shear == pytest.approx(Vn)
        assert sdm.design_shear == pytest.approx(0.85 * Vn)

    def test_nominal_moment_increases_with_steel(self):
        """More bars give a larger Mn."""
        moments = [design_single_beam(_beam(n)).sdm.nominal_moment for n in (2, 3, 4)]
        assert moments[0] < moments[1] < moments[2]

    def test_under_reinforced_status(self, wsd_scenario):
        """An under-reinforced section passes."""
        assert wsd_scenario.sdm.is_under_reinforced
        assert wsd_scenario.status == DesignStatus.PASS

    def test_over_reinforced_is_warning(self):
        """rho above rho_max is reported as a warning."""
        result = design_single_beam(_beam(6, bar=DeformedBar.DB32, width=20, height=40))
        assert not result.sdm.is_under_reinforced
        assert result.status == DesignStatus.WARNING


class TestNoReinforcement:

    def test_single_beam_without_layers(self):
        """No bars, no result."""
        assert design_single_beam(BeamInputs(width=30, height=50)) is None

    def test_double_beam_needs_both_layers(self):
        """A doubly reinforced beam needs both layer sets."""
        inputs = DoubleBeamInputs(
            width=30, height=60,
            tension_layers=[ReinforcementLayer(bar_size=DeformedBar.DB25, count=4)],
        )
        assert design_double_beam(inputs) is None


def _double(width, tension=4, compression=2):
    return DoubleBeamInputs(
        width=width, height=60, cover=4, cover_top=4,
        tension_layers=[ReinforcementLayer(bar_size=DeformedBar.DB25, count=tension)],
        compression_layers=[ReinforcementLayer(bar_size=DeformedBar.DB20, count=compression)],
    )


def _yield_boundary_width() -> float:
    """Width at which the assumed-yield strain in As' equals fy / Es."""
    sec = calculate_double_section_properties(_double(30))
    eps_y = 4000 / STEEL_MODULUS
    c_yield = sec.effective_depth_prime * 0.003 / (0.003 - eps_y)
    net_force = (sec.tension_steel_area - sec.compression_steel_area) * 4000
    return net_force / (0.85 * 240 * 0.85 * c_yield)


class TestDoubleBeam:

    @pytest.fixture(scope="class")
    def result(self):
        return design_double_beam(_double(30))

    def test_wsd_neutral_axis_balances_first_moments(self, result):
        """kd satisfies the transformed-section first-moment balance."""
        sec = result.section
        wsd = result.wsd
        kd = wsd.neutral_axis_depth
        n = wsd.modular_ratio
        lhs = 30 * kd * kd / 2 + (2 * n - 1) * sec.compression_steel_area * (kd - sec.effective_depth_prime)
        rhs = n * sec.tension_steel_area * (sec.effective_depth - kd)
        assert lhs == pytest.approx(rhs)

    def test_wsd_compression_steel_stress_capped(self, result):
        """fs' never exceeds the allowable steel stress."""
        assert result.wsd.compression_steel_stress <= result.wsd.allowable_steel_stress

    def test_wsd_moment_sum(self, result):
        """M = Mc + Ms'."""
        wsd = result.wsd
        assert wsd.moment_capacity == pytest.approx(
            wsd.moment_concrete + wsd.moment_compression_steel
        )

    def test_sdm_non_yield_converges(self, result):
        """At b = 30 cm As' does not yield and the iteration converges."""
        sdm = result.sdm
        assert not sdm.compression_steel_yields
        assert sdm.converged
        assert 0 < sdm.iterations <= 20
        assert sdm.compression_steel_stress < 4000
        assert any("does not yield" in note for note in result.notes)

    def test_sdm_equilibrium(self, result):
        """Concrete plus compression steel balances As fy."""
        sec = result.section
        sdm = result.sdm
        concrete = 0.85 * 240 * 30 * sdm.compression_block_depth
        steel = sec.compression_steel_area * sdm.compression_steel_stress
        assert concrete + steel == pytest.approx(sec.tension_steel_area * 4000, rel=1e-3)

    def test_design_moment_is_phi_times_nominal(self, result):
        """phi Mn = 0.90 Mn for the doubly reinforced section."""
        assert result.sdm.design_moment == 0.90 * result.sdm.nominal_moment

    def test_yielding_branch_on_narrow_section(self):
        """A narrow section yields As' without iterating."""
        sdm = design_double_beam(_double(_yield_boundary_width() * 0.8)).sdm
        assert sdm.compression_steel_yields
        assert sdm.compression_steel_stress == 4000
        assert sdm.iterations == 0

    def test_yield_boundary_flips_without_moment_jump(self):
        """Mn is continuous across the yield boundary width."""
        b = _yield_boundary_width()
        below = design_double_beam(_double(b * (1 - 1e-4))).sdm
        above = design_double_beam(_double(b * (1 + 1e-4))).sdm
        assert below.compression_steel_yields
        assert not above.compression_steel_yields
        assert above.compression_steel_stress == pytest.approx(4000, rel=1e-3)
        assert below.nominal_moment == pytest.approx(above.nominal_moment, rel=1e-3)

    def test_compression_steel_stress_clamped(self):
        """fs' is clamped to plus or minus fy."""
        assert compression_steel_stress(100, 5, 4000) == 4000
        assert compression_steel_stress(2, 5, 4000) == -4000
        assert compression_steel_stress(0, 5, 4000) == -4000
        assert compression_steel_stress(10, 5, 4000) == pytest.approx(2_040_000 * 0.0015)

    def test_compression_steel_exceeding_tension_steel(self):
        """As' larger than As starts from c = d' and reports convergence."""
        result = design_double_beam(_double(30, tension=1, compression=2))
        sdm = result.sdm
        assert sdm.assumed_block_depth < 0
        assert not sdm.compression_steel_yields
        assert sdm.iterations <= 20
        flagged = any("not converged" in note for note in result.notes)
        assert flagged == (not sdm.converged)
