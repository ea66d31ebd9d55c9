"""Generation stages: cave automaton, Voronoi mosaic and treasure placement."""
