from __future__ import annotations

def _pick_glsl_version(ctx_version_code: int) -> int:
    """Pick a GLSL version compatible with the active OpenGL context.

    - For OpenGL >= 3.3: use GLSL 330
    - For OpenGL >= 3.2: use GLSL 150
    """
    if ctx_version_code >= 330:
        return 330
    return 150

_VERT_BODY = """
in vec3 in_pos;
in vec2 in_uv;
in vec3 in_norm;

uniform mat4 u_proj;
uniform mat4 u_view;
uniform vec3 u_offset;

out vec2 v_uv;
out vec3 v_norm;

void main() {
    v_uv = in_uv;
    v_norm = in_norm;
    gl_Position = u_proj * u_view * vec4(in_pos + u_offset, 1.0);
}
"""

_FRAG_BODY = """
in vec2 v_uv;
in vec3 v_norm;

uniform sampler2D u_tex;
uniform vec3 u_light_dir;
uniform bool u_flat;
uniform vec3 u_flat_color;

out vec4 f_color;

void main() {
    if (u_flat) {
        f_color = vec4(u_flat_color, 1.0);
        return;
    }
    // Texture is sRGB
    vec3 albedo = pow(texture(u_tex, v_uv).rgb, vec3(2.2));
    float diff = max(dot(normalize(v_norm), normalize(u_light_dir)), 0.0);
    vec3 col = albedo * (0.35 + 0.65 * diff);
    f_color = vec4(pow(col, vec3(1.0 / 2.2)), 1.0);
}
"""

_LINE_VERT_BODY = """
in vec3 in_pos;
in vec3 in_color;

uniform mat4 u_proj;
uniform mat4 u_view;

out vec3 v_color;

void main() {
    v_color = in_color;
    gl_Position = u_proj * u_view * vec4(in_pos, 1.0);
}
"""

_LINE_FRAG_BODY = """
in vec3 v_color;
out vec4 f_color;

void main() {
    f_color = vec4(v_color, 1.0);
}
"""

def shader_sources(ctx_version_code: int) -> tuple[str, str]:
    ver = _pick_glsl_version(ctx_version_code)
    prefix = f"#version {ver}\n"
    return prefix + _VERT_BODY, prefix + _FRAG_BODY

def line_shader_sources(ctx_version_code: int) -> tuple[str, str]:
    ver = _pick_glsl_version(ctx_version_code)
    prefix = f"#version {ver}\n"
    return prefix + _LINE_VERT_BODY, prefix + _LINE_FRAG_BODY
