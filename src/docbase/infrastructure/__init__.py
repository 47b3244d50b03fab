"""Infrastructure layer - the MongoDB driver boundary.

Everything that talks to Motor lives here; the domain and core layers do
not import the driver.
"""
