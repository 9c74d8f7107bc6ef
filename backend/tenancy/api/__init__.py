"""HTTP surface for the rental cost calculator and booking quotes."""
