"""Application layer – feature gates and the job scheduling runtime."""
