"""StudyHub - study analytics and calendar layout."""
