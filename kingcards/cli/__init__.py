"""Terminal front-end for the King delle Cartes engine."""
