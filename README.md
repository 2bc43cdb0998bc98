# rasteriser

A small software rasteriser built on NumPy and Pillow. It loads triangle
meshes from Wavefront OBJ files, projects them through a perspective camera,
clips triangles against the near plane, fills them using a depth buffer with
per-pixel lighting from three fixed coloured lights, and applies a Gaussian
bloom before writing each frame to an image file.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

```
rasteriser
```

With no arguments this reads `scene.obj` from the current directory and renders
a turntable animation in which the camera circles the origin once. By default
that is 24 frames per second for 5 seconds at 512×512 pixels. Each frame is
bloomed and written as `out/ouput-<frame>.png`, and a line such as
`Completed 3/120 frames` is printed as each frame finishes.

Options:

- `scene` (positional, optional): the OBJ file to render, default `scene.obj`.
- `-o`, `--out`: directory for the frames, default `out` (created if missing).
- `--width`, `--height`: frame size in pixels, default 512 each.
- `--fps`: frames per second, default 24.
- `--duration`: length in seconds, default 5.

## OBJ input

`rasteriser.scene.parse_obj` and `load_obj` understand only these lines:

- `o <name>` starts a new object; objects without faces are dropped.
- `v x y z` adds a vertex.
- `vn x y z` adds a normal, which is normalised on load.
- `f v//n v//n v//n` adds a triangle with vertex and normal indices.

Blank lines are skipped and any other element is logged as a warning and
ignored. Objects before the first `o` line are named `monke`. Face indices are
made relative to the object they belong to. A malformed line, or a face that
refers to a vertex or normal outside its own object, raises `ValueError`
naming the line number.

## Library use

```python
from rasteriser.bloom import apply_bloom, gaussian_kernel_2d
from rasteriser.camera import Camera
from rasteriser.renderer import Renderer
from rasteriser.scene import load_obj

objects = load_obj("scene.obj")

camera = Camera(
    (0.0, 1.0, 4.0, 1.0),   # position
    (0.0, 0.0, 0.0, 1.0),   # point looked at
    (0.0, 1.0, 0.0),        # up
    80.0,                   # field of view, degrees
    0.1,                    # near plane
    10.0,                   # far plane
)

renderer = Renderer(256, 256)
for obj in objects:
    renderer.add_object(obj)
renderer.render(camera)
renderer.save("frame.png")

kernel = gaussian_kernel_2d(18, 32.0)
glowing = apply_bloom(renderer.render_buff, kernel, 0.32, 1.0)
```

After `render`, `Renderer.render_buff` is a `(height, width, 3)` array of
bytes and `Renderer.depth_buff` a `(height, width)` array of depths, infinite
where nothing was drawn. `apply_bloom` returns a new byte array: pixels whose
mean brightness is above the threshold are scaled by the strength, blurred
with the kernel and added onto the original image.

`rasteriser.cli.render_animation(objects, out_dir, width, height, fps, duration)`
renders the whole turntable sequence to a directory and returns the paths of
the written frames in order.

## Modules

- `rasteriser.geometry`: `screen_to_image` and `image_to_screen` coordinate
  conversion, the `edge` function and `point_in_triangle`, and the `look_at`
  and `perspective_fov` matrix builders.
- `rasteriser.camera`: `Camera`, `FaceIndex`, and the `Object3D` protocol;
  anything given to `Renderer.add_object` needs `name`, `vertices`, `normals`,
  `faces` and `transform` attributes, otherwise `TypeError` is raised.
- `rasteriser.renderer`: `Renderer`, `ClipSpaceObject` for near-plane
  clipping, and the `shade` lighting function.
- `rasteriser.scene`: `MeshObject`, `parse_obj`, `load_obj` and the rotation
  helpers `rotation_y`, `rotation_z` and `rotate_z`.
- `rasteriser.bloom`: `gaussian_kernel_2d` and `apply_bloom`.
- `rasteriser.cli`: `render_animation` and `main`, the `rasteriser` command.

## What it does not do

There is no window or interactive viewer, and frames are not joined into a
video; the output is a directory of still images. The lights and the camera
path are fixed in code. OBJ materials, textures, texture coordinates and
faces with more than three corners are not read.