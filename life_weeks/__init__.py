"""Life Weeks: a lifespan rendered as a grid of weeks, plus illustrative statistics."""
