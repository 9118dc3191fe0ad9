# raytracer

A small recursive ray tracer in pure Python with no third-party dependencies.
It reads scenes in a line-based scene description format (SDF), renders
spheres, boxes, triangles, composites and Wavefront OBJ meshes with ambient,
diffuse and specular lighting, reflection and refraction, and writes
plain-text (P3) PPM images. It also has a generator that writes one scene
file per frame of a keyframed animation.

## Installation

```
pip install .
```

## Scene description format

Each line of an `.sdf` file is one command; lines starting with `#` are
ignored. Materials must be defined before the shapes that use them.

```
define material red 1 0 0 1 0 0 1 1 1 20 0 1 1
define shape sphere ball 0 0 -100 20 red
define shape box crate -10 -10 -150 10 10 -130 red
define shape triangle tri 0 0 0 1 0 0 0 1 0 red
define shape composite group ball crate
add group tri
define light bulb 0 100 0 1 1 1 5
define ambient amb 0.2 0.2 0.2 1
define camera eye 60 0 0 0 0 0 -1 0 1 0
transform crate rotate 0 45 0
transform tri scale 2 2 2
render image.ppm 400 300 2 4
```

- `define material NAME ka kd ks m [glossy opacity ior]`: `ka`, `kd` and
  `ks` are three numbers each, `m` the specular exponent. Glossiness,
  opacity and index of refraction are optional (defaults 0, 1, 1).
- `define shape sphere NAME cx cy cz RADIUS MATERIAL`
- `define shape box NAME minx miny minz maxx maxy maxz MATERIAL`
- `define shape triangle NAME` three vertices, then `MATERIAL`
- `define shape obj NAME` loads `NAME.obj` from the resource directory as a
  composite of triangles; `mtllib` files it names are read for materials
  (`newmtl`, `Ka`, `Kd`, `Ks`, `Ns`, `d`, `Ni`).
- `define shape composite NAME CHILD...` moves existing shapes into a new
  composite; `add NAME CHILD...` moves more shapes into an existing one.
- `define light NAME x y z r g b BRIGHTNESS` adds a point light.
- `define ambient NAME r b g BRIGHTNESS` sets the ambient light (note the
  colour is read in r, b, g order).
- `define camera NAME FOV_X px py pz dx dy dz ux uy uz` sets the camera;
  direction and up are normalised.
- `transform NAME translate|rotate|scale x y z` transforms a top-level
  shape; rotation angles are pitch, yaw, roll in degrees.
- `render FILE WIDTH HEIGHT AA_STEPS BOUNCES` renders the scene as it stands
  to `FILE` in the output directory.

Unknown materials or shapes raise `KeyError`; malformed numbers raise
`ValueError`.

## Commands

`raytracer` reads the resource directory from the first line of
`resource-paths.txt`, loads `cornell.sdf` from it (running any `render`
lines it holds), then renders the scene again to `img.ppm` in that
directory at 800x800 with 2 anti-aliasing steps and 5 bounces.

```
raytracer
raytracer --paths-file paths.txt --scene example.sdf --output out.ppm --size 400 --aa-steps 1 --bounces 3
```

`raytracer-movie` writes one scene file per frame (`frame0000.sdf`, ...,
24 frames per second for 41 seconds) into `./movie/files`, built from
built-in animations and from pose files read from `./movie/obj`
(`walk/pose01.txt`–`pose08.txt`, `halt/pose01.txt`–`pose05.txt`,
`steal/pose01.txt`–`pose10.txt`, each line `name pitch yaw roll`). It then
loads each frame file from `--start` to `--end`, which renders it into
`./movie/images`; frame files that do not exist are skipped. Rendering the
frames needs the body part and `dodecahedron` OBJ models in the resource
directory.

```
raytracer-movie
raytracer-movie --res-dir movie/obj --files-dir movie/files --images-dir movie/images --start 0 --end 10
```

## Using the library

```python
from raytracer.scene import load_scene
from raytracer.renderer import Renderer

scene = load_scene("scenes/example.sdf", "scenes", "out")
renderer = Renderer(200, 200, "out/example.ppm", 1, 3)
renderer.render(scene, scene.camera)
floats = renderer.pixel_buffer()   # r, g, b per pixel
```

Shapes can be used on their own:

```python
from raytracer.sphere import Sphere
from raytracer.ray import Ray
from raytracer.vector import Vec3

sphere = Sphere(2.0, Vec3(0, 0, 10))
hit = sphere.intersect(Ray(Vec3(0, 0, 0), Vec3(0, 0, 1)))
print(hit.does_intersect, hit.distance, hit.position)
```

Modules: `vector` (`Vec3`, `Mat4`), `ray`, `color`, `material`, `lights`
(`Light`, `PointLight`, `Camera`), `shape`, `sphere`, `triangle`, `box`,
`composite`, `pixel`, `ppmwriter`, `renderer`, `scene`, `bodypart`,
`animation` and `moviemaker`.

## What it does not do

- There is no window or interactive viewer: images are only written as PPM
  files and kept in `Renderer.color_buffer`.
- Rendering runs in a single thread and is slow for large images.
- OBJ texture coordinates are ignored; a face uses the normal of its first
  vertex if normals are given, otherwise its own face normal.

## Running the tests

```
pip install .[test]
pytest
```