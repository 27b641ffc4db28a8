"""
Property-based testing using Hypothesis.

This package contains property tests that verify mathematical invariants
hold across randomly generated tables and queries.

Modules:
    test_mortality_properties: canonicalization, survival and present value identities
"""
