"""MoveWise — moving-quote aggregation and recommendation service."""
