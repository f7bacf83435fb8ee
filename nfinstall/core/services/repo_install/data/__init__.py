"""L0 Data — constants only."""
