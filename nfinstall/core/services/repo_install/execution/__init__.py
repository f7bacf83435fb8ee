"""L4 Execution — everything that changes the host."""
