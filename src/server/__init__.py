"""HTTP API for running lift dispatch simulations."""
