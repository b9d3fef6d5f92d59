import random
import struct
import unittest

from icon_fixtures import (
    PATTERN_WORD, TRIANGLE_COLORS, TRIANGLE_NORMALS, TRIANGLE_POSITIONS,
    TRIANGLE_UVS, build_compressed_icon, build_icon, pack_animation,
    pack_rle_texture, row_coded_texture,
)
from ps2icon.errors import (
    DecodeError, IconError, IndexOutOfRange, InvalidTextureDimensions,
    MalformedHeader, TruncatedFile,
)
from ps2icon.icon_format.icon_constants import (
    HEADER_SIZE, TEXTURE_BLOCK_SIZE, TEXTURE_FLAG_COMPRESSED, TEXTURE_WORD_COUNT,
)
from ps2icon.icon_format.icon_header import DecodeLimits
from ps2icon.icon_format.icon_reader import IconReader, decode_icon


class TestDecodeValidIcon(unittest.TestCase):
    def test_single_triangle_icon(self) -> None:
        icon = decode_icon(build_icon())

        self.assertEqual(icon.vertex_count, 3)
        self.assertEqual(icon.shape_count, 1)
        self.assertEqual(icon.frame_count, 1)
        self.assertFalse(icon.is_animated)
        self.assertIsNone(icon.animation)
        self.assertEqual(list(icon.vertices), TRIANGLE_POSITIONS)
        self.assertEqual(list(icon.normals), TRIANGLE_NORMALS)
        self.assertEqual(list(icon.uvs), TRIANGLE_UVS)
        self.assertEqual(list(icon.colors), TRIANGLE_COLORS)
        self.assertEqual(len(icon.shapes), 1)
        self.assertEqual(icon.shapes[0].name, "body")
        self.assertEqual(icon.shapes[0].triangles, ((0, 1, 2),))
        self.assertEqual(len(icon.texture), TEXTURE_WORD_COUNT)
        self.assertTrue(all(word == PATTERN_WORD for word in icon.texture))

    def test_texture_words_are_kept_raw(self) -> None:
        words = row_coded_texture()
        icon = decode_icon(build_icon(texture=words))
        self.assertEqual(list(icon.texture), words)

    def test_decoding_is_deterministic(self) -> None:
        data = build_icon(texture=row_coded_texture())
        self.assertEqual(decode_icon(data), decode_icon(data))

    def test_reader_exposes_header(self) -> None:
        reader = IconReader(build_icon())
        reader.read()
        self.assertEqual(reader.header.vertex_count, 3)
        self.assertFalse(reader.header.texture_compressed)

    def test_multiple_shapes_and_unnamed_shape(self) -> None:
        frames = [TRIANGLE_POSITIONS + [(0.0, 0.0, 0.0)]]
        data = build_icon(
            frames=frames,
            normals=TRIANGLE_NORMALS + [(0.0, 0.0, 1.0)],
            uvs=TRIANGLE_UVS + [(0.0, 1.0)],
            colors=TRIANGLE_COLORS + [(1, 2, 3, 4)],
            shapes=[("front", [(0, 1, 2)]), ("", [(1, 2, 3), (0, 2, 3)])],
        )
        icon = decode_icon(data)
        self.assertEqual(icon.shape_count, 2)
        self.assertEqual(icon.shapes[1].name, "shape_1")
        self.assertEqual(icon.triangle_count, 3)
        for shape in icon.shapes:
            for tri in shape.triangles:
                self.assertTrue(all(i < icon.vertex_count for i in tri))

    def test_trailing_bytes_are_ignored(self) -> None:
        icon = decode_icon(build_icon() + b"\x00" * 16)
        self.assertEqual(icon.vertex_count, 3)


class TestDecodeAnimation(unittest.TestCase):
    def _animated(self, keyframes=((1, [(0.0, 0.0), (1.0, 1.0)]),), **kwargs):
        frame1 = [(x + 1.0, y, z) for x, y, z in TRIANGLE_POSITIONS]
        return build_icon(
            frames=[TRIANGLE_POSITIONS, frame1],
            animation=pack_animation(frame_length=30, speed=0.5, keyframes=keyframes),
            **kwargs
        )

    def test_frames_and_keys_are_decoded(self) -> None:
        icon = decode_icon(self._animated())

        self.assertEqual(icon.frame_count, 2)
        self.assertTrue(icon.is_animated)
        self.assertEqual(list(icon.positions(0)), TRIANGLE_POSITIONS)
        self.assertEqual(icon.positions(1)[0], (1.5, 1.0, -2.0))
        self.assertEqual(icon.animation.frame_length, 30)
        self.assertEqual(icon.animation.anim_speed, 0.5)
        self.assertEqual(len(icon.animation.keyframes), 1)
        keyframe = icon.animation.keyframes[0]
        self.assertEqual(keyframe.frame_index, 1)
        self.assertEqual([(k.time, k.value) for k in keyframe.keys],
                         [(0.0, 0.0), (1.0, 1.0)])

    def test_keyframe_for_missing_frame_is_rejected(self) -> None:
        with self.assertRaises(IndexOutOfRange):
            decode_icon(self._animated(keyframes=((2, [(0.0, 1.0)]),)))

    def test_bad_animation_id_is_rejected(self) -> None:
        frame1 = list(TRIANGLE_POSITIONS)
        data = build_icon(frames=[TRIANGLE_POSITIONS, frame1],
                          animation=pack_animation(anim_id=7))
        with self.assertRaises(MalformedHeader):
            decode_icon(data)

    def test_missing_animation_section_is_truncation(self) -> None:
        frame1 = list(TRIANGLE_POSITIONS)
        data = build_icon(frames=[TRIANGLE_POSITIONS, frame1],
                          texture_block=b"")
        with self.assertRaises(TruncatedFile):
            decode_icon(data)


class TestDecodeCompressedTexture(unittest.TestCase):
    def test_single_repeat_run(self) -> None:
        icon = decode_icon(build_compressed_icon())
        self.assertTrue(icon.texture_type & TEXTURE_FLAG_COMPRESSED)
        self.assertEqual(len(icon.texture), TEXTURE_WORD_COUNT)
        self.assertEqual(set(icon.texture), {PATTERN_WORD})

    def test_mixed_literal_and_repeat_runs(self) -> None:
        literal = [0x11111111, 0x22222222, 0x33333333]
        block = pack_rle_texture([
            ("literal", literal),
            ("repeat", 0xFF000000, TEXTURE_WORD_COUNT - 4),
            ("literal", [0x44444444]),
        ])
        icon = decode_icon(build_compressed_icon(texture_block=block))
        self.assertEqual(list(icon.texture[:3]), literal)
        self.assertEqual(icon.texture[3], 0xFF000000)
        self.assertEqual(icon.texture[-2], 0xFF000000)
        self.assertEqual(icon.texture[-1], 0x44444444)

    def test_short_expansion_is_rejected(self) -> None:
        block = pack_rle_texture([("repeat", PATTERN_WORD, 100)])
        with self.assertRaises(InvalidTextureDimensions):
            decode_icon(build_compressed_icon(texture_block=block))

    def test_overlong_expansion_is_rejected(self) -> None:
        block = pack_rle_texture([
            ("repeat", PATTERN_WORD, 0x4000),
            ("repeat", PATTERN_WORD, 1),
        ])
        with self.assertRaises(InvalidTextureDimensions):
            decode_icon(build_compressed_icon(texture_block=block))

    def test_size_prefix_larger_than_file_is_truncation(self) -> None:
        block = struct.pack("<I", 1000) + struct.pack("<HI", 0x4000, PATTERN_WORD)
        with self.assertRaises(TruncatedFile):
            decode_icon(build_compressed_icon(texture_block=block))


class TestDecodeErrors(unittest.TestCase):
    def test_empty_buffer(self) -> None:
        with self.assertRaises(TruncatedFile):
            decode_icon(b"")

    def test_bad_magic(self) -> None:
        with self.assertRaises(MalformedHeader):
            decode_icon(build_icon(magic=0x12345678))

    def test_zero_frames(self) -> None:
        with self.assertRaises(MalformedHeader):
            decode_icon(build_icon(frame_count=0))

    def test_counts_over_limits(self) -> None:
        with self.assertRaises(MalformedHeader):
            decode_icon(build_icon(), DecodeLimits(max_vertices=2))
        with self.assertRaises(MalformedHeader):
            decode_icon(build_icon(shape_count=5000))
        with self.assertRaises(MalformedHeader):
            decode_icon(build_icon(), DecodeLimits(max_triangles_per_shape=0))

    def test_keyframe_count_has_its_own_limit(self) -> None:
        frame1 = [(x, y, z + 1.0) for x, y, z in TRIANGLE_POSITIONS]
        data = build_icon(
            frames=[TRIANGLE_POSITIONS, frame1],
            animation=pack_animation(keyframes=[(0, []), (1, []), (1, [])]),
        )
        # the frame limit does not cap the keyframe count
        icon = decode_icon(data, DecodeLimits(max_frames=2))
        self.assertEqual(len(icon.animation.keyframes), 3)
        with self.assertRaises(MalformedHeader):
            decode_icon(data, DecodeLimits(max_keyframes=2))

    def test_huge_vertex_count_fails_without_allocating(self) -> None:
        data = build_icon(vertex_count=60000)
        with self.assertRaises(TruncatedFile):
            decode_icon(data)

    def test_index_equal_to_vertex_count_is_out_of_range(self) -> None:
        with self.assertRaises(IndexOutOfRange):
            decode_icon(build_icon(shapes=[("body", [(0, 1, 3)])]))

    def test_truncated_mid_texture(self) -> None:
        data = build_icon()
        with self.assertRaises(TruncatedFile):
            decode_icon(data[:-TEXTURE_BLOCK_SIZE // 2])
        with self.assertRaises(TruncatedFile):
            decode_icon(data[:-1])

    def test_truncated_in_vertex_pool(self) -> None:
        with self.assertRaises(TruncatedFile):
            decode_icon(build_icon()[:HEADER_SIZE + 10])

    def test_errors_share_a_base_class(self) -> None:
        for exc in (MalformedHeader, TruncatedFile, IndexOutOfRange):
            self.assertTrue(issubclass(exc, DecodeError))
            self.assertTrue(issubclass(exc, ValueError))


class TestDecodeRobustness(unittest.TestCase):
    def test_every_prefix_fails_cleanly(self) -> None:
        data = build_compressed_icon()
        for size in range(len(data)):
            with self.subTest(size=size):
                with self.assertRaises(IconError):
                    decode_icon(data[:size])
        decode_icon(data)

    def test_random_mutations_never_crash(self) -> None:
        frame1 = [(x, y + 0.5, z) for x, y, z in TRIANGLE_POSITIONS]
        seeds = [
            build_compressed_icon(),
            build_compressed_icon(
                frames=[TRIANGLE_POSITIONS, frame1],
                animation=pack_animation(keyframes=[(1, [(0.0, 1.0)])]),
            ),
        ]
        rng = random.Random(0x1C0)
        for base in seeds:
            for _ in range(300):
                data = bytearray(base)
                for _ in range(rng.randint(1, 8)):
                    data[rng.randrange(len(data))] = rng.randrange(256)
                try:
                    icon = decode_icon(bytes(data))
                except IconError:
                    continue
                self.assertEqual(len(icon.texture), TEXTURE_WORD_COUNT)
                for shape in icon.shapes:
                    for tri in shape.triangles:
                        self.assertLess(max(tri), icon.vertex_count)
                for frame in icon.frames:
                    self.assertEqual(len(frame), icon.vertex_count)


if __name__ == "__main__":
    unittest.main()
