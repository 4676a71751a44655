"""Configuration for property-based testing."""

import os

from hypothesis import HealthCheck, settings, Verbosity


class PropertyTestConfig:
    """Hypothesis profiles shared by the property tests."""

    MIN_ITERATIONS = 100

    MAX_ITERATIONS = 500

    # Database-backed properties build a fresh schema per example
    DATABASE_ITERATIONS = 25

    DEADLINE = None

    @classmethod
    def configure_hypothesis(cls):
        """Register and load the profiles."""
        settings.register_profile(
            "default",
            max_examples=cls.MIN_ITERATIONS,
            deadline=cls.DEADLINE,
            verbosity=Verbosity.normal,
            suppress_health_check=[HealthCheck.too_slow],
            print_blob=True,
        )

        # Deterministic runs for CI
        settings.register_profile(
            "ci",
            max_examples=cls.MIN_ITERATIONS,
            deadline=cls.DEADLINE,
            verbosity=Verbosity.quiet,
            database=None,
            derandomize=True,
            suppress_health_check=[HealthCheck.too_slow],
            print_blob=True,
        )

        settings.register_profile(
            "dev",
            max_examples=cls.MAX_ITERATIONS,
            deadline=cls.DEADLINE,
            verbosity=Verbosity.verbose,
            suppress_health_check=[HealthCheck.too_slow],
            print_blob=True,
        )

        settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))
