import base64
import unittest

from iterm2img.encoder import (
    Auto, Cells, Percent, Pixels, from_bytes, parse_length
)


class EncoderTest(unittest.TestCase):

    def _fields(self, sequence):
        header, _ = sequence[len('\x1b]1337;File='):-1].split(':', 1)
        return header.split(';')

    def testEmpty(self):
        self.assertEqual(
            from_bytes([]).build(), '\x1b]1337;File=size=0:\x07'
        )

    def testName(self):
        result = from_bytes(b'').name('xyz').build()
        self.assertEqual(result, '\x1b]1337;File=size=0;name=xyz:\x07')

    def testWidth(self):
        self.assertEqual(
            from_bytes(b'').width(100).build(),
            '\x1b]1337;File=size=0;width=100:\x07'
        )
        self.assertEqual(
            from_bytes(b'').width_px(100).build(),
            '\x1b]1337;File=size=0;width=100px:\x07'
        )
        self.assertEqual(
            from_bytes(b'').width_percent(50).build(),
            '\x1b]1337;File=size=0;width=50%:\x07'
        )
        self.assertEqual(
            from_bytes(b'').width_auto().build(),
            '\x1b]1337;File=size=0;width=auto:\x07'
        )

    def testHeight(self):
        self.assertEqual(
            from_bytes(b'').height(200).build(),
            '\x1b]1337;File=size=0;height=200:\x07'
        )
        self.assertEqual(
            from_bytes(b'').height_px(200).build(),
            '\x1b]1337;File=size=0;height=200px:\x07'
        )
        self.assertEqual(
            from_bytes(b'').height_percent(25).build(),
            '\x1b]1337;File=size=0;height=25%:\x07'
        )
        self.assertEqual(
            from_bytes(b'').height_auto().build(),
            '\x1b]1337;File=size=0;height=auto:\x07'
        )

    def testBooleans(self):
        self.assertEqual(
            from_bytes(b'').preserve_aspect_ratio(True).build(),
            '\x1b]1337;File=size=0;preserve_aspect_ratio=1:\x07'
        )
        self.assertEqual(
            from_bytes(b'').preserve_aspect_ratio(False).build(),
            '\x1b]1337;File=size=0;preserve_aspect_ratio=0:\x07'
        )
        self.assertEqual(
            from_bytes(b'').inline(True).build(),
            '\x1b]1337;File=size=0;inline=1:\x07'
        )
        self.assertEqual(
            from_bytes(b'').inline(False).build(),
            '\x1b]1337;File=size=0;inline=0:\x07'
        )

    def testPayload(self):
        self.assertEqual(
            from_bytes(b'abcdefg').build(),
            '\x1b]1337;File=size=7:YWJjZGVmZw==\x07'
        )

    def testAllOptions(self):
        result = (
            from_bytes(b'')
            .name('xyz')
            .width(100)
            .height(200)
            .preserve_aspect_ratio(False)
            .inline(True)
            .build()
        )
        self.assertEqual(
            result,
            '\x1b]1337;File=size=0;name=xyz;width=100;height=200;'
            'preserve_aspect_ratio=0;inline=1:\x07'
        )

    def testNameIsNotEscaped(self):
        result = from_bytes(b'abc').name('a;b:c').build()
        self.assertEqual(
            result, '\x1b]1337;File=size=3;name=a;b:c:YWJj\x07'
        )

    def testFieldOrderIgnoresCallOrder(self):
        result = (
            from_bytes(b'abcdefg')
            .inline(True)
            .preserve_aspect_ratio(True)
            .height_px(20)
            .width_percent(50)
            .name('xyz')
            .build()
        )
        self.assertEqual(
            self._fields(result),
            ['size=7', 'name=xyz', 'width=50%', 'height=20px',
             'preserve_aspect_ratio=1', 'inline=1']
        )

    def testLastWriteWins(self):
        result = from_bytes(b'').width(10).width_px(30).build()
        self.assertEqual(self._fields(result), ['size=0', 'width=30px'])

        result = from_bytes(b'').height_auto().height(4).build()
        self.assertEqual(self._fields(result), ['size=0', 'height=4'])

        result = from_bytes(b'').name('a').name('b').build()
        self.assertEqual(self._fields(result), ['size=0', 'name=b'])

    def testSettersReturnNewValues(self):
        image = from_bytes(b'abc')
        named = image.name('xyz')

        self.assertIsNot(image, named)
        self.assertIsNone(image.display_name)
        self.assertEqual(named.display_name, 'xyz')
        self.assertEqual(image.build(), '\x1b]1337;File=size=3:YWJj\x07')
        # Building twice gives the same sequence.
        self.assertEqual(named.build(), named.build())

    def testRoundTrip(self):
        payloads = [b'', b'\x00', bytes(range(256)), b'\xff' * 1000]
        for payload in payloads:
            result = from_bytes(payload).name('f').build()
            fields = self._fields(result)
            self.assertEqual(
                [f for f in fields if f.startswith('size=')],
                ['size={}'.format(len(payload))]
            )
            encoded = result[:-1].split(':', 1)[1]
            self.assertNotIn('\n', encoded)
            self.assertEqual(base64.b64decode(encoded), payload)

    def testAcceptsByteSequences(self):
        self.assertEqual(from_bytes(bytearray(b'ab')).payload, b'ab')
        self.assertEqual(from_bytes(memoryview(b'ab')).payload, b'ab')
        self.assertEqual(from_bytes([97, 98]).payload, b'ab')

    def testRejectsWrongTypes(self):
        with self.assertRaises(TypeError):
            from_bytes('abc')
        with self.assertRaises(TypeError):
            from_bytes(5)
        with self.assertRaises(TypeError):
            from_bytes(b'').name(10)
        with self.assertRaises(TypeError):
            from_bytes(b'').width(1.5)
        with self.assertRaises(TypeError):
            from_bytes(b'').height_px(True)
        with self.assertRaises(ValueError):
            from_bytes(b'').width_percent(-1)
        with self.assertRaises(TypeError):
            from_bytes(b'').width_spec('10px')


class LengthSpecTest(unittest.TestCase):

    def testRender(self):
        self.assertEqual(Cells(3).render(), '3')
        self.assertEqual(Pixels(3).render(), '3px')
        self.assertEqual(Percent(3).render(), '3%')
        self.assertEqual(Auto().render(), 'auto')

    def testEquality(self):
        self.assertEqual(Cells(3), Cells(3))
        self.assertNotEqual(Cells(3), Pixels(3))
        self.assertNotEqual(Cells(3), Cells(4))
        self.assertEqual(Auto(), Auto())
        self.assertEqual(len({Percent(1), Percent(1), Auto()}), 2)

    def testParseLength(self):
        self.assertIsNone(parse_length(None))
        self.assertEqual(parse_length(10), Cells(10))
        self.assertEqual(parse_length('10'), Cells(10))
        self.assertEqual(parse_length('10px'), Pixels(10))
        self.assertEqual(parse_length(' 50% '), Percent(50))
        self.assertEqual(parse_length('AUTO'), Auto())
        self.assertEqual(parse_length(Pixels(2)), Pixels(2))

    def testParseLengthInvalid(self):
        for value in ('', 'px', '-3', '1.5', '10em', 'wide', 2.5):
            with self.assertRaises(ValueError):
                parse_length(value)


if __name__ == '__main__':
    unittest.main()
