"""The three-pass renderer: shadow map, shaded colour and screen-space AO."""

from __future__ import annotations

import logging
import random

from .depth_shader import DepthShader
from .matrix import Matrix
from .phong_shader import PhongShader
from .rasterizer import RenderContext, draw_model
from .scene import Scene
from .shader import Uniforms
from .tga import Format, TGAImage
from .vector import Vec

log = logging.getLogger(__name__)

FLT_MAX = 3.4028234663852886e38
SHADOW_SIZE = 2048
LIGHT_CAMERA_DIST = 3.0

_KERNEL_SIZE_PIXELS = 10
_PIXEL_SAMPLES = 16
_NOISE_SAMPLES = 16
_SSAO_STRENGTH = 2.0
_SSAO_BIAS = 0.12
_SSAO_RANGE = 50.0
_BACKGROUND_DEPTH = -10000.0


def lerp(a: float, b: float, f: float) -> float:
    """Linear interpolation from a to b."""
    return a + f * (b - a)


class RenderBuffers:
    """Colour, depth and normal buffers of one render target."""

    def __init__(self, width: int, height: int) -> None:
        self.framebuffer = TGAImage(width, height, Format.RGB)
        self.zbuffer = [-FLT_MAX] * (width * height)
        self.normal_buffer = [Vec(0, 0, 0)] * (width * height)


class Renderer:
    """Renders a scene into render buffers."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._kernel: list[Vec] = []
        self._noise: list[Vec] = []

    def render(self, scene: Scene, target: RenderBuffers) -> None:
        light_view = Matrix.lookat(scene.light_pos, scene.camera.look_at, scene.camera.up)
        light_proj_view = Matrix.projection(LIGHT_CAMERA_DIST) @ light_view

        log.info("Running shadow pass")
        shadow_map = [-FLT_MAX] * (SHADOW_SIZE * SHADOW_SIZE)
        self.run_shadow_pass(scene, shadow_map, light_proj_view)

        log.info("Running colour pass")
        self.run_color_pass(scene, target, shadow_map, light_proj_view)

        log.info("Applying SSAO")
        self.apply_ssao(target)

    def run_shadow_pass(self, scene: Scene, shadow_map: list[float], light_proj_view: Matrix) -> None:
        """Fill the shadow map with depths seen from the light."""
        scratch = TGAImage(SHADOW_SIZE, SHADOW_SIZE, Format.RGB)
        light_viewport = Matrix.viewport(0, 0, SHADOW_SIZE, SHADOW_SIZE)
        for obj in scene.models:
            uniforms = Uniforms(
                projection=Matrix.identity(4),
                viewport=light_viewport,
                model_view=light_proj_view @ obj.model_matrix,
            )
            ctx = RenderContext(obj.model, scratch, shadow_map)
            draw_model(ctx, DepthShader(uniforms))

    def run_color_pass(
        self,
        scene: Scene,
        target: RenderBuffers,
        shadow_map: list[float],
        light_proj_view: Matrix,
    ) -> None:
        """Shade every model into the target buffers."""
        width = target.framebuffer.width
        height = target.framebuffer.height
        camera = scene.camera
        view = Matrix.lookat(camera.pos, camera.look_at, camera.up)
        projection = Matrix.projection(camera.focal_length)
        viewport = Matrix.viewport(0, 0, width, height)

        for obj in scene.models:
            model = obj.model_matrix
            uniforms = Uniforms(
                model=model,
                model_view=view @ model,
                projection=projection,
                viewport=viewport,
                light_dir=scene.light_dir,
                light_proj_view=light_proj_view,
                shadow_map=shadow_map,
                shadow_width=SHADOW_SIZE,
                shadow_height=SHADOW_SIZE,
                normal_matrix=model.inverse_transpose_3x3(),
                camera_pos=camera.pos,
            )
            shader = PhongShader(obj.diffuse, obj.normal, obj.specular, uniforms, obj.use_alpha_test)
            ctx = RenderContext(obj.model, target.framebuffer, target.zbuffer, target.normal_buffer)
            draw_model(ctx, shader)

    def apply_ssao(self, target: RenderBuffers) -> None:
        """Darken the framebuffer by the ambient-occlusion factor of each pixel."""
        fb = target.framebuffer
        width, height = fb.width, fb.height
        ssao = self.compute_ssao(target.zbuffer, target.normal_buffer, width, height)
        for x in range(width):
            for y in range(height):
                color = fb.get(x, y)
                intensity = ssao[x + y * width]
                for i in range(3):
                    color[i] = int(color[i] * intensity)
                fb.set(x, y, color)

    def _ensure_kernel(self) -> None:
        if self._kernel:
            return
        rand = self._rng.random
        for i in range(_PIXEL_SAMPLES):
            sample = Vec(rand() * 2.0 - 1.0, rand() * 2.0 - 1.0).normalize()
            scale = i / _PIXEL_SAMPLES
            self._kernel.append(sample * lerp(0.1, 1.0, scale * scale))
        self._noise = [
            Vec(rand() * 2.0 - 1.0, rand() * 2.0 - 1.0).normalize()
            for _ in range(_NOISE_SAMPLES)
        ]

    def compute_ssao(
        self,
        zbuffer: list[float],
        normal_buffer: list[Vec],
        width: int,
        height: int,
    ) -> list[float]:
        """Per-pixel ambient light factor in [0, 1]; background pixels get 0."""
        if len(zbuffer) != width * height:
            raise ValueError(
                f"depth buffer holds {len(zbuffer)} values, expected {width * height}"
            )
        self._ensure_kernel()
        result = [0.0] * (width * height)

        for y in range(height):
            for x in range(width):
                idx = x + y * width
                current = zbuffer[idx]
                if current < _BACKGROUND_DEPTH:
                    continue
                rotation = self._noise[(x % 4) + (y % 4) * 4]
                cos_t, sin_t = rotation.x, rotation.y
                hits = 0
                for k in self._kernel:
                    sx = x + int((k.x * cos_t - k.y * sin_t) * _KERNEL_SIZE_PIXELS)
                    sy = y + int((k.x * sin_t + k.y * cos_t) * _KERNEL_SIZE_PIXELS)
                    if 0 <= sx < width and 0 <= sy < height:
                        sample = zbuffer[sx + sy * width]
                        if sample > current + _SSAO_BIAS and abs(current - sample) < _SSAO_RANGE:
                            hits += 1
                occlusion = min(1.0, hits / _PIXEL_SAMPLES * _SSAO_STRENGTH)
                result[idx] = 1.0 - occlusion
        return result