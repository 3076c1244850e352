"""
Locust scenario user classes.

- :mod:`.browsing` defines :class:`PageTourUser` (fixed page list) and
  :class:`FrontDeskUser` (weighted search, view and registration mix)

Both inherit from the abstract :class:`~.base.PetClinicUser`.
"""
