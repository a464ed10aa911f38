# softraster

A small software rasterizer in pure Python, with no dependencies outside the
standard library. It loads Wavefront OBJ meshes and TGA textures and renders a
scene in three passes:

1. a shadow pass, which fills a 2048 x 2048 depth map as seen from the light;
2. a colour pass, which uses Phong shading with tangent-space normal maps,
   specular maps and 3 x 3 filtered shadow-map lookups;
3. screen-space ambient occlusion (SSAO), which darkens the finished frame.

The result is written as a TGA image.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The `softraster` command builds a fixed demo scene (three posed demon models, a
head with its inner eyes, and a floor) and renders it to a TGA file:

```
softraster --models-root ../Models --output final_scene.tga
```

Options:

- `--models-root DIR` – directory holding the model tree (default `../Models`).
- `--output FILE` – the TGA file to write (default `final_scene.tga`).
- `--width N`, `--height N` – frame size in pixels (default 2000 x 2000).
- `--seed N` – seed for the random SSAO sampling kernel; without it each run
  samples differently.

The models are not shipped with the package. The command expects this layout
under the models root:

```
obj/floor.obj, floor_diffuse.tga, floor_nm_tangent.tga, floor_spec.tga
obj/diablo3_pose/diablo3_pose.obj, diablo3_pose_diffuse.tga,
                 diablo3_pose_nm_tangent.tga, diablo3_pose_spec.tga
obj/african_head/african_head.obj, african_head_diffuse.tga,
                 african_head_nm_tangent.tga, african_head_spec.tga
obj/african_head/african_head_eye_inner.obj, african_head_eye_inner_diffuse.tga,
                 african_head_eye_inner_nm_tangent.tga, african_head_eye_inner_spec.tga
```

On success it prints `Done! Saved <file>` and exits with 0. It exits with 1
if the scene cannot be loaded or the image cannot be written, and with 2 if the
width or height is not positive. Progress of the passes is reported through the
`logging` module at INFO level.

Rendering runs in pure Python, so a large frame takes a long time; try
`--width 200 --height 200` first.

## Library use

```python
from softraster.camera import Camera
from softraster.model_instance import ModelInstance
from softraster.renderer import RenderBuffers, Renderer
from softraster.scene import Scene
from softraster.vector import Vec

camera = Camera(Vec(0, 2, 6), Vec(0, 0, 0), Vec(0, 1, 0), 3.0)
light_pos = Vec(2, 3, 3).normalize() * 5.0
light_dir = (light_pos - camera.look_at).normalize()

scene = Scene(camera, light_dir, light_pos)

head = ModelInstance.from_files(
    "models/african_head/",
    "african_head.obj",
    "african_head_diffuse.tga",
    "african_head_nm_tangent.tga",
    "african_head_spec.tga",
    False,
)
head.rotation = Vec(-20, 10, 0)   # Euler angles in degrees
head.scale = Vec(0.6, 0.6, 0.6)
head.position = Vec(0, -0.8, -1.2)
scene.add_model(head)             # stores a copy of the instance

buffers = RenderBuffers(400, 400)
Renderer(seed=0).render(scene, buffers)
buffers.framebuffer.write("scene.tga")
```

### Building blocks

- `softraster.vector`: `Vec`, an immutable float vector of any size with
  `+`, `-`, scalar `*` and `/`, `length`, `normalize`, `homogeneous` and `xyz`;
  and the functions `dot`, `cross`, `determinant_2d` and `angle_to_radians`.
- `softraster.matrix.Matrix`: immutable column-major matrices, with
  `identity`, `diagonal`, `translation`, `scale`, `rotation_x` / `rotation_y` /
  `rotation_z`, `shear`, `lookat`, `projection` and `viewport`, plus
  `transpose` and `inverse_transpose_3x3`. Matrices multiply matrices and
  vectors with the `@` operator, as in `view @ model`.
- `softraster.tga`: `TGAImage.read` and `TGAImage.write` handle uncompressed
  and RLE-compressed TGA images in grayscale, RGB and RGBA (`Format`). Pixels
  are `TGAColor` values in BGRA order; `get` and `set` ignore coordinates
  outside the image. Malformed files raise `TGAError`.
- `softraster.model_loader.Model`: loads the `v`, `vn`, `vt` and `f` entries
  of an OBJ file. Face corners must be of the form `v/vt/vn`; malformed lines
  raise `ValueError` and out-of-range indices raise `IndexError`.
- `softraster.geometry`: `Face` and `BBox`.
- `softraster.rasterizer`: `barycentric`, `triangle_bbox`, `triangle_basis`,
  `draw_triangle` and `draw_model`, which run a shader over a model into a
  `RenderContext` of framebuffer, z-buffer and optional normal buffer.
- `softraster.shader`: the abstract `Shader`, with `Varyings`, `Uniforms` and
  `interpolate`. A `fragment` that returns `None` discards the pixel.
- `softraster.depth_shader.DepthShader` and
  `softraster.phong_shader.PhongShader`: the two shaders the renderer uses.
- `softraster.renderer`: `RenderBuffers` and `Renderer`, whose `render` runs
  all three passes; the passes are also available one by one as
  `run_shadow_pass`, `run_color_pass`, `apply_ssao` and `compute_ssao`.

## What it does not do

- It has no window or on-screen display; the only output is a TGA file.
- It reads no image format other than TGA and no mesh format other than OBJ.
  Only the first three corners of each OBJ face are used, so polygons with more
  corners are not triangulated.
- The light's colour on a `Scene` is stored but not used in shading.