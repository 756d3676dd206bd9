"""Plan skeleton computation: periodization math, race calculators and orchestration."""
