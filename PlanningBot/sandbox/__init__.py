"""PlanningBot.sandbox — in-memory Simulation for headless play and tests."""
