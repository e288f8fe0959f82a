"""Planning domain: projects, phases, allocations, absences and sync records."""
