# raydarts

Building blocks for a small physically based ray tracer, in plain Python with
no third-party dependencies. Vectors and colours are ordinary tuples of floats.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `raydarts.colormap`: `viridis`, `inferno`, `magma` and `plasma`, polynomial
  fits of the perceptual colormaps. Each takes `t` and returns an RGB tuple.
- `raydarts.array2d`: `Array2d`, a resizable width-by-height grid indexed by
  `(x, y)` or by a linear index, with a bounds-checked `at`. `Image` is an
  `Array2d` of RGB tuples. `upsample` enlarges a grid by nearest-neighbour
  replication, and `generate_heatmap` and `generate_graymap` turn a density grid
  into an `Image`.
- `raydarts.box`: `Box`, an N-dimensional axis-aligned bounding box. It has
  `enclose`, `contains`, `center`, `diagonal`, `volume`, `area`, `offset` and
  `intersect`, which clips a ray segment to the box.
- `raydarts.spherical`: angle conversions, the `theta`/`phi` functions and their
  sines and cosines, and mappings between directions, spherical coordinates and
  equirectangular coordinates.
- `raydarts.onb`: `ONB`, an orthonormal basis with `to_local` and `to_world`, and
  `coordinate_system`, which completes a frame around a unit normal.
- `raydarts.parsing`: `parse_vec`, `parse_matrix` and `parse_transform` read
  vectors and 4x4 row-major matrices from JSON-style specifications (`from`/`at`/`up`,
  `o`/`x`/`y`/`z`, `translate`, `scale`, `rotate`, `matrix`, or a list of these).
  `vec_to_json` and `matrix_to_json` write them back. Bad input raises `SceneError`.
- `raydarts.photon`: `Photon`, which stores its direction as two quantised angles
  and its power in RGBE form; `power()` and `direction()` decode them.
- `raydarts.perlin`: `Perlin` gradient noise with `noise` and `turb`. Pass a
  `random.Random` for reproducible noise.
- `raydarts.progress`: `Progress`, a terminal progress bar redrawn from a
  background thread; a total of zero shows a busy bar. `terminal_width` and
  `format_duration` are helpers.
- `raydarts.materials`: `HitInfo`, `ScatterRecord`, the `Material` base class and
  `Lambertian`, `Metal` and `Dielectric`, plus `fresnel_dielectric`, `reflect`,
  `refract`, `refract_direction` and `random_in_unit_sphere`.
- `raydarts.glossy`: `DiffuseLight`, `Phong` and `BlinnPhong`, and
  `create_material`, which builds any of the materials from a specification with
  a `type` key.
- `raydarts.media`: the `Medium` base class, `HomogeneousMedium` and
  `VacuumMedium`, and `create_medium`.

## Example

```python
from raydarts.box import Box
from raydarts.colormap import inferno
from raydarts.glossy import create_material
from raydarts.materials import HitInfo
from raydarts.parsing import parse_transform

print(inferno(0.5))

box = Box((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
print(box.intersect((0.0, 0.0, -5.0), (0.0, 0.0, 1.0)))  # (4.0, 6.0)

xform = parse_transform([{"scale": [2, 2, 2]}, {"translate": [0, 1, 0]}])

material = create_material({"type": "lambertian", "albedo": 0.8})
hit = HitInfo(p=(0.0, 0.0, 0.0), sn=(0.0, 0.0, 1.0))
record = material.sample((0.0, 0.0, -1.0), hit, (0.3, 0.7), 0.5)
print(record.wo, material.pdf((0.0, 0.0, -1.0), record.wo, hit))
```

A progress bar for a long loop:

```python
from raydarts.progress import Progress

with Progress("Rendering", 1000) as progress:
    for _ in range(1000):
        progress.step()
```

## What this package does not do

It is a set of components, not a renderer. There is no scene loader, camera,
surface geometry or integrator, so it cannot render an image by itself. There
is no spatial index for photon lookups. `Image` holds pixels in memory only:
`loadable_formats` and `savable_formats` list file extensions, but nothing here
reads or writes image files. The homogeneous medium does not sample free-flight
distances; its transmittance is always one.