"""Building blocks for a small physically based ray tracer: colormaps, grids, boxes, spherical maths, photons, noise, progress bars, materials and media."""

__version__ = "0.1.0"