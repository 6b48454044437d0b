"""
Tests for node models and the node type registry.
"""

import dataclasses
from typing import ClassVar

import numpy as np
import pytest
from numpy.testing import assert_allclose

from nodes import (
    NODE_TYPES,
    NodeModel,
    PQAlgebraic,
    PVAlgebraic,
    SlackAlgebraic,
    SwingEq,
    SwingEqLVS,
    create_node,
)


class TestNodeContract:
    """Test the capability contract shared by all node types."""

    @pytest.mark.parametrize("node, dim, flags", [
        (SlackAlgebraic(U=1.0), 2, (0, 0)),
        (PQAlgebraic(P=-0.1, Q=0.0), 2, (0, 0)),
        (PVAlgebraic(P=0.1, V=1.0), 2, (0, 0)),
        (SwingEq(H=5.0, P=0.1, D=0.1), 3, (1, 1, 1)),
        (SwingEqLVS(H=5.0, P=0.1, D=0.1), 3, (1, 1, 1)),
    ])
    def test_dimension_and_mass_flags(self, node, dim, flags):
        """Test dimension equals number of symbols and mass flags."""
        assert node.dimension == dim
        assert node.mass_flags == flags
        assert node.symbols[:2] == ("u_r", "u_i")
        assert node.differential_flags.dtype == bool

    def test_only_bare_swing_is_unsupported(self):
        """Test the operating point capability flag."""
        assert SwingEq.supports_operating_point is False
        assert SwingEqLVS.supports_operating_point is True
        assert SlackAlgebraic.supports_operating_point is True

    def test_symbols_must_start_with_voltage(self):
        """Test that a node type without leading voltage variables is rejected."""
        with pytest.raises(TypeError):
            class BadNode(NodeModel):
                symbols: ClassVar = ("ω", "u_r", "u_i")
                mass_flags: ClassVar = (1, 0, 0)

                def rhs(self, x, i, p, t):
                    return np.zeros(3)

    def test_mass_flags_length_checked(self):
        """Test that mass flags must match the symbols."""
        with pytest.raises(TypeError):
            class ShortFlags(NodeModel):
                symbols: ClassVar = ("u_r", "u_i", "θ")
                mass_flags: ClassVar = (0, 0)

                def rhs(self, x, i, p, t):
                    return np.zeros(3)

    def test_nodes_are_immutable(self):
        """Test that node parameters cannot be reassigned."""
        node = SlackAlgebraic(U=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.U = 2.0


class TestRegistry:
    """Test construction of nodes by type tag."""

    def test_known_types_registered(self):
        """Test every concrete node type is in the registry."""
        for cls in (SlackAlgebraic, PQAlgebraic, PVAlgebraic, SwingEq, SwingEqLVS):
            assert NODE_TYPES[cls.__name__] is cls

    def test_create_node(self):
        """Test create_node builds the tagged type with parameters."""
        node = create_node("PQAlgebraic", P=-0.3, Q=-0.1)
        assert node == PQAlgebraic(P=-0.3, Q=-0.1)
        assert node.type_tag == "PQAlgebraic"

    def test_unknown_tag(self):
        """Test unknown tag fails with KeyError."""
        with pytest.raises(KeyError, match="NoSuchNode"):
            create_node("NoSuchNode")


class TestNodeDynamics:
    """Test local right-hand sides."""

    def test_slack(self):
        """Test slack residual is U - u."""
        out = SlackAlgebraic(U=1.0).rhs(np.array([0.9, 0.1]), 0j, None, 0.0)
        assert_allclose(out, [0.1, -0.1])

    def test_pq_without_current(self):
        """Test PQ residual equals S when no current flows."""
        out = PQAlgebraic(P=-0.3, Q=-0.1).rhs(np.array([1.0, 0.0]), 0j, None, 0.0)
        assert_allclose(out, [-0.3, -0.1])

    def test_pq_control_input_shifts_active_power(self):
        """Test node control input is added to P."""
        node = PQAlgebraic(P=-0.3, Q=-0.1)
        out = node.rhs(np.array([1.0, 0.0]), 0j, 0.05, 0.0)
        assert_allclose(out, [-0.25, -0.1])

    def test_pq_power_balance(self):
        """Test PQ residual vanishes when u conj(i) equals S."""
        S = complex(-0.3, -0.1)
        u = 0.98 - 0.02j
        i = np.conj(S / u)
        out = PQAlgebraic(P=S.real, Q=S.imag).rhs(np.array([u.real, u.imag]), i, None, 0.0)
        assert_allclose(out, [0.0, 0.0], atol=1e-12)

    def test_pv(self):
        """Test PV residual [P - Re s, V - |u|]."""
        out = PVAlgebraic(P=0.2, V=1.05).rhs(np.array([1.0, 0.0]), 0j, None, 0.0)
        assert_allclose(out, [0.2, 0.05])

    def test_swing_rotates_voltage(self):
        """Test du = j ω u for the bare swing equation."""
        node = SwingEq(H=5.0, P=0.0, D=0.0)
        out = node.rhs(np.array([1.0, 0.0, 0.5]), 0j, None, 0.0)
        assert_allclose(out, [0.0, 0.5, 0.0])

    def test_swing_frequency_equation(self):
        """Test dω = (P - D ω - Re s) Ω 2π / H."""
        node = SwingEq(H=5.0, P=0.3, D=0.1, Omega=50.0)
        out = node.rhs(np.array([1.0, 0.0, 0.2]), 0j, None, 0.0)
        assert out[2] == pytest.approx((0.3 - 0.1 * 0.2) * 50.0 * 2 * np.pi / 5.0)

    def test_lvs_equilibrium(self):
        """Test SwingEqLVS is at rest at |u| = V, ω = 0 without load."""
        node = SwingEqLVS(H=5.0, P=0.0, D=0.1, V=1.0)
        out = node.rhs(np.array([0.6, 0.8, 0.0]), 0j, None, 0.0)
        assert_allclose(out, [0.0, 0.0, 0.0], atol=1e-15)

    def test_lvs_pulls_voltage_magnitude(self):
        """Test voltage above V is driven back radially."""
        node = SwingEqLVS(H=5.0, P=0.0, D=0.1, Gamma=2.0, V=1.0)
        out = node.rhs(np.array([1.1, 0.0, 0.0]), 0j, None, 0.0)
        assert out[0] == pytest.approx(-2.0 * 0.1)
        assert out[1] == pytest.approx(0.0)

    def test_lvs_at_zero_voltage_is_finite(self):
        """Test the voltage term at u = 0 gives a finite derivative."""
        node = SwingEqLVS(H=5.0, P=0.4, D=0.5, Gamma=2.0, V=1.0)
        out = node.rhs(np.zeros(3), 0j, None, 0.0)
        assert np.all(np.isfinite(out))
        assert_allclose(out[:2], [0.0, 0.0])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
