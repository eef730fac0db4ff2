"""Footing thickness, flexural steel and shear checks."""
import logging
import math

import pytest

from rcdesign.core.footing_reinforcement import (
    DemandExceedsCapacityError,
    calculate_bar_spacing,
    calculate_effective_depth,
    calculate_minimum_steel,
    calculate_minimum_thickness,
    calculate_moment,
    calculate_required_steel,
    calculate_rn,
    check_beam_shear,
    check_punching_shear,
    design_all_footings,
    design_footing_reinforcement,
    factored_load,
    minimum_steel_ratio,
    punching_capacity,
    punching_perimeter,
    required_steel_ratio,
)
from rcdesign.models.footing import ReinforcementInputs
from rcdesign.models.outputs import DesignStatus
from rcdesign.report import summarise_critical_footing

QA = 20.0


@pytest.fixture(scope="module")
def inputs():
    """f'c 240, SD40, DB16 bars, 75 mm cover, 0.4 x 0.4 m column."""
    return ReinforcementInputs()


@pytest.fixture
def punching_footing(make_footing):
    """B = 2.4 m carrying Pu = 150 Tonf."""
    return make_footing("P1", dimension=2.4, dl_sdl=150 / 1.4, ll=0.0)


@pytest.fixture
def over_capacity_footing(make_footing):
    """B = 3.0 m carrying Pu = 300 Tonf, too much for a 0.2 m slab."""
    return make_footing("OC", dimension=3.0, dl_sdl=300 / 1.4, ll=0.0)


class TestLoads:

    def test_factored_load(self):
        """Pu = 1.4 (DL + SDL) + 1.7 LL."""
        assert factored_load(75.0, 26.0) == pytest.approx(1.4 * 75 + 1.7 * 26)

    def test_punching_perimeter(self, inputs):
        """bo = 2 (c1 + d) + 2 (c2 + d)."""
        assert punching_perimeter(inputs, 0.5) == pytest.approx(2 * 0.9 + 2 * 0.9)


class TestThickness:

    def test_punching_governs_thickness(self, punching_footing, inputs):
        """The search stops at the first d passing punching, h rounded to 0.75 m."""
        h, converged = calculate_minimum_thickness(punching_footing, inputs)
        assert converged
        # first trial d = B/10 is not enough
        assert punching_capacity(240, punching_perimeter(inputs, 0.24), 0.24) < 150
        assert h == pytest.approx(0.75)
        assert round(h / 0.05, 9) == round(h / 0.05)
        d = calculate_effective_depth(h, inputs)
        assert punching_capacity(240, punching_perimeter(inputs, d), d) >= 150

    def test_search_terminates_without_converging(self, make_footing, inputs, caplog):
        """An impossible load stops after 10 checks and warns."""
        footing = make_footing("HEAVY", dimension=2.4, dl_sdl=5000.0, ll=0.0)
        with caplog.at_level(logging.WARNING):
            h, converged = calculate_minimum_thickness(footing, inputs)
        assert not converged
        assert h == pytest.approx(1.1)
        assert "punching shear not satisfied" in caplog.text

    def test_trials_are_traced(self, punching_footing, inputs):
        """Each thickness trial records its punching capacity."""
        steps = []
        calculate_minimum_thickness(punching_footing, inputs, steps)
        assert len(steps) > 1
        assert all(s.description.startswith("Thickness trial") for s in steps)
        assert all(s.result < 150 for s in steps[:-1])
        assert steps[-1].result >= 150

    def test_effective_depth(self, inputs):
        """d = h - cover - db - db/2."""
        assert calculate_effective_depth(0.75, inputs) == pytest.approx(0.75 - 0.075 - 0.016 - 0.008)


class TestFlexure:

    def test_moments_at_column_face(self, punching_footing, inputs):
        """Cantilever moment qu B l² / 2 at each column face."""
        Mux, Muy = calculate_moment(punching_footing, inputs)
        qu = 150 / 2.4 ** 2
        assert Mux == pytest.approx(qu * 2.4 * 1.0 ** 2 / 2)
        assert Muy == pytest.approx(Mux)

    def test_required_steel_carries_moment(self):
        """The required steel develops exactly phi Mn = Mu."""
        As = calculate_required_steel(10.0, 100.0, 50.0, 240.0, 4000.0)
        a = As * 4000 / (0.85 * 240 * 100)
        phi_Mn = 0.9 * As * 4000 * (50 - a / 2)
        assert phi_Mn == pytest.approx(10.0 * 100_000, rel=1e-6)

    def test_required_steel_from_rn_and_ratio(self):
        """As = rho b d with rho taken from Rn."""
        rn = calculate_rn(10.0, 100.0, 50.0)
        assert rn == pytest.approx(1_000_000 / (0.9 * 100 * 50 ** 2))
        rho = required_steel_ratio(rn, 240.0, 4000.0)
        assert calculate_required_steel(10.0, 100.0, 50.0, 240.0, 4000.0) == pytest.approx(rho * 100 * 50)

    def test_required_steel_over_capacity(self):
        """Rn beyond 0.425 f'c raises with Rn and the limit attached."""
        with pytest.raises(DemandExceedsCapacityError) as excinfo:
            calculate_required_steel(500.0, 100.0, 20.0, 240.0, 4000.0)
        assert excinfo.value.limit == pytest.approx(0.425 * 240)
        assert excinfo.value.rn > excinfo.value.limit
        assert isinstance(excinfo.value, ValueError)

    @pytest.mark.parametrize("fy, rho_min", [(4000, 0.0020), (5000, 0.0020), (3000, 0.0018)])
    def test_minimum_steel(self, fy, rho_min):
        """rho_min is 0.0020 from fy 4000, 0.0018 below."""
        assert minimum_steel_ratio(fy) == rho_min
        assert calculate_minimum_steel(240, 75, fy) == pytest.approx(rho_min * 240 * 75)

    def test_bar_spacing(self):
        """36 cm² of DB16 needs 18 bars over 2.4 m."""
        num, spacing = calculate_bar_spacing(36.0, 16, 2.4)
        assert num == 18
        assert spacing == pytest.approx(2400 / 19)


class TestShear:

    def test_beam_shear_section_outside_footing(self):
        """No one-way shear when the section at d lies beyond the edge."""
        assert check_beam_shear(1.0, 0.4, 0.5, 50.0, 240) == (0.0, 0.0, True)

    def test_beam_shear(self):
        """Vu = qu B x against 0.85 x 0.17 sqrt(f'c) B d."""
        Vu, phi_Vc, ok = check_beam_shear(2.4, 0.4, 0.651, 150 / 5.76, 240)
        assert Vu == pytest.approx(150 / 5.76 * 2.4 * (1.0 - 0.651))
        assert phi_Vc == pytest.approx(0.85 * 0.17 * math.sqrt(240) * 240 * 65.1 / 1000)
        assert ok

    def test_punching_shear(self, inputs):
        """Vu = Pu against 0.85 x 0.53 sqrt(f'c) bo d."""
        Vu, phi_Vc, bo, ok = check_punching_shear(150.0, 0.651, inputs)
        assert Vu == 150.0
        assert bo == pytest.approx(4 * 1.051)
        assert phi_Vc == pytest.approx(0.85 * 0.53 * math.sqrt(240) * 420.4 * 65.1 / 1000)
        assert ok


class TestDesignFooting:

    def test_design_passes(self, punching_footing, inputs):
        """The punching-sized footing passes every check."""
        result = design_footing_reinforcement(punching_footing, inputs, QA)
        assert result.unique_name == "P1"
        assert result.factored_load == pytest.approx(150.0)
        assert result.soil_pressure == pytest.approx(150 / 5.76)
        assert result.footing_thickness == pytest.approx(0.75)
        assert result.thickness_converged is True
        assert result.num_bars_x >= 1
        assert result.spacing_x == pytest.approx(2400 / (result.num_bars_x + 1))
        assert result.punching_shear_ok
        assert result.status == DesignStatus.PASS

    def test_flexure_intermediates_are_kept(self, punching_footing, inputs):
        """Rn, rho and rho_min are on the result and consistent with As."""
        result = design_footing_reinforcement(punching_footing, inputs, QA)
        d_cm = result.effective_depth * 100
        assert result.rn_x == pytest.approx(calculate_rn(result.moment_x, 240.0, d_cm))
        assert result.rn_y == pytest.approx(result.rn_x)
        assert result.rho_x == pytest.approx(required_steel_ratio(result.rn_x, 240, 4000))
        assert result.as_req_x == pytest.approx(result.rho_x * 240.0 * d_cm)
        assert result.rho_min == 0.0020

    def test_trace_covers_the_design(self, punching_footing, inputs):
        """The equation trace is numbered and holds trials, Rn and punching."""
        result = design_footing_reinforcement(punching_footing, inputs, QA)
        assert [s.step_number for s in result.steps] == list(range(1, len(result.steps) + 1))
        by_name = {s.description: s.result for s in result.steps}
        assert by_name["Factored column load (Pu)"] == pytest.approx(150.0)
        assert by_name["Effective depth (d)"] == pytest.approx(result.effective_depth)
        assert by_name["Strength coefficient Rn (x)"] == pytest.approx(result.rn_x)
        assert by_name["Punching shear capacity (φVc)"] == pytest.approx(result.punching_shear_capacity)
        assert any(s.description.startswith("Thickness trial") for s in result.steps)

    def test_thickness_override(self, punching_footing, inputs):
        """A given thickness skips the search and its trace."""
        result = design_footing_reinforcement(punching_footing, inputs, QA, thickness=0.9)
        assert result.footing_thickness == 0.9
        assert result.thickness_converged is None
        assert result.effective_depth == pytest.approx(0.9 - 0.099)
        assert not any(s.description.startswith("Thickness trial") for s in result.steps)

    def test_zero_thickness_uses_search(self, punching_footing, inputs):
        """A zero thickness means search from punching shear."""
        result = design_footing_reinforcement(punching_footing, inputs, QA, thickness=0.0)
        assert result.footing_thickness == pytest.approx(0.75)

    def test_rectangular_column_uses_each_dimension(self, punching_footing):
        """x uses c1 and y uses c2 for moments and one-way shear."""
        inputs = ReinforcementInputs(column_width=0.3, column_depth=0.6)
        result = design_footing_reinforcement(punching_footing, inputs, QA)
        assert result.moment_x > result.moment_y
        assert result.beam_shear_x > result.beam_shear_y

    def test_over_capacity_is_flagged(self, over_capacity_footing, inputs, caplog):
        """Over capacity fails the footing, keeps Rn and lays out As,min."""
        with caplog.at_level(logging.WARNING):
            result = design_footing_reinforcement(over_capacity_footing, inputs, QA, thickness=0.2)
        assert result.over_capacity_x and result.over_capacity_y
        assert result.rn_x > 0.425 * 240
        assert result.rho_x is None
        assert result.as_req_x is None
        assert result.as_min_x == pytest.approx(0.002 * 300 * 20)
        assert result.num_bars_x == 6
        assert not result.flexure_ok
        assert result.status == DesignStatus.FAIL
        assert "exceeds the section limit" in caplog.text

    def test_over_capacity_summary(self, over_capacity_footing, inputs):
        """The summary marks the missing As instead of printing zero."""
        result = design_footing_reinforcement(over_capacity_footing, inputs, QA, thickness=0.2)
        text = summarise_critical_footing(result)
        assert "exceeds section" in text
        assert "STATUS : FAIL" in text

    def test_zero_size_footing_is_rejected(self, make_footing, inputs):
        """A footing without a plan size cannot be designed directly."""
        footing = make_footing("Z", dimension=0.0, dl_sdl=0.0, ll=0.0)
        with pytest.raises(ValueError, match="no plan size"):
            design_footing_reinforcement(footing, inputs, QA)

    def test_design_all_keeps_order(self, make_footing, inputs):
        """Footings are designed independently, order preserved."""
        footings = [
            make_footing("A", dimension=1.8, dl_sdl=45.0, ll=15.0),
            make_footing("B", dimension=2.2, dl_sdl=68.0, ll=22.0),
        ]
        results = design_all_footings(footings, inputs, QA)
        assert [r.unique_name for r in results] == ["A", "B"]
        assert all(r.footing_thickness > 0 for r in results)

    def test_design_all_skips_zero_size(self, make_footing, inputs, caplog):
        """Zero-size footings are skipped with a warning."""
        footings = [
            make_footing("Z", dimension=0.0, utilization=0.0, dl_sdl=0.0, ll=0.0),
            make_footing("A", dimension=1.8, dl_sdl=45.0, ll=15.0),
        ]
        with caplog.at_level(logging.WARNING):
            results = design_all_footings(footings, inputs, QA)
        assert [r.unique_name for r in results] == ["A"]
        assert "reinforcement design skipped" in caplog.text
