"""
Performance testing package (Locust-based).

Contains Locust user classes that generate browsing traffic against a
running PetClinic with seed data loaded: a fixed page tour that also
hits the error page, and a weighted front-desk workflow that searches,
views and registers owners.

Key Concepts Demonstrated:
- Weighted task distribution to model realistic read/write ratios
- Tagged scenarios so runs can select a subset via ``--tags``
"""
