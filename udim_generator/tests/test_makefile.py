"""
Tests for makefile fragment generation.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from ..config import GeneratorConfig
from ..parsing.flags import ProcessFlag
from ..parsing.manifest import parse, parse_line
from ..processing.makefile import MakefileGenerator, MipOptions, pad


MANIFEST = [
    "hairpin_001_ao_1001.tga -ao\n",
    "hairpin_001_basecolor_1001.tga\n",
    "hairpin_001_nrm_1001.tga -nrm -highprec\n",
    "hairpin_001_spec_1001.tga -spec\n",
]

EXPECTED = (
    "MIPS = \n"
    "\thairpin_001_ao_1001.tga                           \\\n"
    "\thairpin_001_basecolor_1001.tga                    \\\n"
    "\thairpin_001_nrm_1001.tga                          \\\n"
    "\thairpin_001_spec_1001.tga                         \\\n"
    "\n"
    "##### MIP Commands Below for 4 Textures #####\n"
    "hairpin_001_ao_UDIM.mip : hairpin_001_ao_1001.tga\n"
    "\t$(MAKEMIP) hairpin_001_ao_1001.tga -tile -priority 0.9 -cal 1.0 \n"
    "hairpin_001_basecolor_UDIM.mip : hairpin_001_basecolor_1001.tga\n"
    "\t$(MAKEMIP) hairpin_001_basecolor_1001.tga -tile -priority 0.1 -cal 1.0 \n"
    "hairpin_001_nrm_UDIM.mip : hairpin_001_nrm_1001.tga\n"
    "\t$(MAKEMIP) hairpin_001_nrm_1001.tga -tile -priority 0.7 -cal 1.0 -normalmap -highprec \n"
    "hairpin_001_spec_UDIM.mip : hairpin_001_spec_1001.tga\n"
    "\t$(MAKEMIP) hairpin_001_spec_1001.tga -tile -priority 0.1 -cal 1.0 -specmap \n"
)


class TestFoldFlags(unittest.TestCase):
    """Test cases for priority and option folding."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.generator = MakefileGenerator()
    
    def test_default(self):
        """Test no flags gives the default priority and no options."""
        self.assertEqual(self.generator.fold_flags([]), MipOptions(0.1, ""))
    
    def test_single_flags(self):
        """Test each flag on its own."""
        cases = [
            (ProcessFlag.AMBIENT_OCCLUSION, MipOptions(0.9, "")),
            (ProcessFlag.SPECULAR, MipOptions(0.1, "-specmap ")),
            (ProcessFlag.NORMAL, MipOptions(0.7, "-normalmap ")),
            (ProcessFlag.HIGH_PRECISION, MipOptions(0.1, "-highprec ")),
        ]
        for flag, expected in cases:
            with self.subTest(flag=flag):
                self.assertEqual(self.generator.fold_flags([flag]), expected)
    
    def test_last_priority_wins(self):
        """Test the last priority-setting flag decides the priority."""
        result = self.generator.fold_flags([ProcessFlag.NORMAL, ProcessFlag.AMBIENT_OCCLUSION])
        self.assertEqual(result, MipOptions(0.9, "-normalmap "))
        
        result = self.generator.fold_flags([ProcessFlag.AMBIENT_OCCLUSION, ProcessFlag.SPECULAR])
        self.assertEqual(result, MipOptions(0.1, "-specmap "))
    
    def test_highprec_keeps_priority(self):
        """Test -highprec does not reset an earlier priority."""
        result = self.generator.fold_flags([ProcessFlag.AMBIENT_OCCLUSION, ProcessFlag.HIGH_PRECISION])
        
        self.assertEqual(result, MipOptions(0.9, "-highprec "))
    
    def test_repeated_flags_accumulate_options(self):
        """Test repeated option flags append each time."""
        result = self.generator.fold_flags([ProcessFlag.NORMAL, ProcessFlag.NORMAL])
        
        self.assertEqual(result.options, "-normalmap -normalmap ")
    
    def test_unrecognized_warns_without_change(self):
        """Test UNRECOGNIZED logs a warning and leaves the state alone."""
        with self.assertLogs('udim_generator.processing.makefile', level='WARNING') as logs:
            result = self.generator.fold_flags([ProcessFlag.NORMAL, ProcessFlag.UNRECOGNIZED])
        
        self.assertEqual(result, MipOptions(0.7, "-normalmap "))
        self.assertIn("Unexpected flag detected", logs.output[0])


class TestMakefileGenerator(unittest.TestCase):
    """Test cases for MakefileGenerator."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.generator = MakefileGenerator()
    
    def test_full_output(self):
        """Test the complete fragment for a four texture manifest."""
        self.assertEqual(self.generator.generate(parse(MANIFEST)), EXPECTED)
    
    def test_empty_records(self):
        """Test zero records still give both headers."""
        content = self.generator.generate([])
        
        self.assertEqual(content, "MIPS = \n\n##### MIP Commands Below for 0 Textures #####\n")
        self.assertIn("MIPS =", content)
        self.assertIn("0 Textures", content)
    
    def test_deterministic(self):
        """Test identical input gives byte-identical output."""
        records = parse(MANIFEST)
        
        first = self.generator.generate(records)
        second = MakefileGenerator().generate(parse(MANIFEST))
        
        self.assertEqual(first, second)
        self.assertEqual(first, self.generator.generate(records))
    
    def test_output_name(self):
        """Test tile number and extension substitution."""
        self.assertEqual(self.generator.output_name("foo_basecolor_1001.tga"), "foo_basecolor_UDIM.mip")
    
    def test_output_name_replaces_all_occurrences(self):
        """Test every occurrence is replaced, not just the first."""
        self.assertEqual(self.generator.output_name("1001_rock_1001.tga.tga"), "UDIM_rock_UDIM.mip.mip")
    
    def test_output_name_without_tokens(self):
        """Test names without 1001 or .tga pass through."""
        self.assertEqual(self.generator.output_name("rock_1002.png"), "rock_1002.png")
    
    def test_ao_scenario_command(self):
        """Test the ambient occlusion command line has priority 0.9 and no options."""
        rule = self.generator.build_rule(parse_line("hairpin_001_ao_1001.tga -ao"))
        
        self.assertEqual(rule.priority, 0.9)
        self.assertEqual(rule.options, "")
        self.assertEqual(rule.command_line, "$(MAKEMIP) hairpin_001_ao_1001.tga -tile -priority 0.9 -cal 1.0 ")
    
    def test_normal_scenario_command(self):
        """Test the normal map command line keeps its trailing option space."""
        rule = self.generator.build_rule(parse_line("hairpin_001_nrm_1001.tga -nrm -highprec"))
        
        self.assertIn("-priority 0.7", rule.command_line)
        self.assertEqual(rule.options, "-normalmap -highprec ")
        self.assertTrue(rule.command_line.endswith("-cal 1.0 -normalmap -highprec "))
    
    def test_long_filename_not_truncated(self):
        """Test filenames longer than the pad width are written whole."""
        filename = "a_very_long_texture_name_that_is_longer_than_fifty_columns_1001.tga"
        content = self.generator.generate(parse([filename]))
        
        self.assertIn(f"\t{filename}\\\n", content)
    
    def test_pad(self):
        """Test the pad filter."""
        self.assertEqual(pad("abc", 5), "abc  ")
        self.assertEqual(pad("abcdef", 3), "abcdef")
        self.assertEqual(len(pad("x")), 50)


class TestMakefileGeneratorConfig(unittest.TestCase):
    """Test generator behaviour driven by configuration."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
    
    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)
    
    def test_custom_config(self):
        """Test configured names, priorities and layout are used."""
        config = GeneratorConfig(
            variable_name="TEXTURES",
            pad_width=10,
            command="$(MIPTOOL)",
            tile=False,
            calibration=2.0,
            udim_token="1011",
            output_extension=".tx",
            ambient_occlusion_priority=0.5,
        )
        generator = MakefileGenerator(config)
        
        content = generator.generate(parse(["rock_ao_1011.tga -ao"]))
        
        self.assertEqual(content, (
            "TEXTURES = \n"
            "\trock_ao_1011.tga\\\n"
            "\n"
            "##### MIP Commands Below for 1 Textures #####\n"
            "rock_ao_UDIM.tx : rock_ao_1011.tga\n"
            "\t$(MIPTOOL) rock_ao_1011.tga -priority 0.5 -cal 2.0 \n"
        ))
    
    def test_template_override(self):
        """Test a makefile.mk.j2 in the template directory replaces the built-in template."""
        template_path = Path(self.temp_dir) / "makefile.mk.j2"
        template_path.write_text(
            "{% for rule in rules %}\n"
            "{{ rule.output_name }}: {{ rule.filename }}\n"
            "{% endfor %}\n"
        )
        generator = MakefileGenerator(template_dir=self.temp_dir)
        
        content = generator.generate(parse(MANIFEST[:2]))
        
        self.assertEqual(content, (
            "hairpin_001_ao_UDIM.mip: hairpin_001_ao_1001.tga\n"
            "hairpin_001_basecolor_UDIM.mip: hairpin_001_basecolor_1001.tga\n"
        ))
    
    def test_template_dir_from_config(self):
        """Test template_dir is picked up from the configuration."""
        generator = MakefileGenerator(GeneratorConfig(template_dir=self.temp_dir))
        
        self.assertEqual(generator.template_dir, Path(self.temp_dir))
    
    def test_missing_template_falls_back(self):
        """Test a template directory without makefile.mk.j2 uses the built-in template."""
        generator = MakefileGenerator(template_dir=self.temp_dir)
        
        with self.assertLogs('udim_generator.processing.makefile', level='WARNING'):
            content = generator.generate(parse(MANIFEST))
        
        self.assertEqual(content, EXPECTED)


if __name__ == '__main__':
    unittest.main()
