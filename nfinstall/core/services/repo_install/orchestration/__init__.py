"""L5 Orchestration — sequencing of a full run."""
