"""PlanningBot.manifests — phase classification and action scoring."""
