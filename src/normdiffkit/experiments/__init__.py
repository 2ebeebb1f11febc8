"""Command-line experiments on finite-difference quotients of the squared norm."""
