import unittest

from regforge.register_map.component import RegisterMapComponent
from regforge.register_map.feature import RegisterMapFeature


def _tree():
    root = RegisterMapComponent(None, "register_map", "register_map", "cfg")
    blocks = []
    for b in range(2):
        block = RegisterMapComponent(root, "register_map", "register_block", "cfg")
        root.add_child(block)
        blocks.append(block)
        for r in range(2):
            register = RegisterMapComponent(block, "register_map", "register", "cfg")
            block.add_child(register)
            for f in range(3):
                register.add_child(RegisterMapComponent(register, "register_map", "bit_field", "cfg"))
    return root, blocks


class TestHierarchicalAccessors(unittest.TestCase):
    def test_hierarchy_follows_the_level(self) -> None:
        root, blocks = _tree()
        register = blocks[0].children[0]
        bit_field = register.children[0]
        self.assertEqual("register_map", root.hierarchy)
        self.assertEqual("register_block", blocks[0].hierarchy)
        self.assertEqual("register", register.hierarchy)
        self.assertEqual("bit_field", bit_field.hierarchy)

    def test_ancestor_or_self_accessors(self) -> None:
        root, blocks = _tree()
        register = blocks[1].children[0]
        bit_field = register.children[2]
        self.assertIs(root, bit_field.register_map)
        self.assertIs(blocks[1], bit_field.register_block)
        self.assertIs(register, bit_field.register)
        self.assertIs(bit_field, bit_field.bit_field)
        self.assertIs(root, root.register_map)

    def test_descendant_accessors(self) -> None:
        root, blocks = _tree()
        self.assertEqual(blocks, root.register_blocks)
        self.assertEqual(4, len(root.registers))
        self.assertEqual(12, len(root.bit_fields))
        self.assertEqual(6, len(blocks[0].bit_fields))
        self.assertEqual(blocks[0].children[1].children, blocks[0].children[1].bit_fields)

    def test_accessors_outside_the_reachable_levels_fail(self) -> None:
        root, blocks = _tree()
        with self.assertRaises(AttributeError):
            root.register
        with self.assertRaises(AttributeError):
            blocks[0].children[0].children[0].registers

    def test_features_resolve_through_their_component(self) -> None:
        root, blocks = _tree()
        register = blocks[0].children[1]
        feature = RegisterMapFeature(register, "name")
        self.assertEqual("register", feature.hierarchy)
        self.assertIs(blocks[0], feature.register_block)
        self.assertEqual(3, len(feature.bit_fields))
        self.assertEqual("cfg", feature.configuration)


if __name__ == "__main__":
    unittest.main()
