"""Tests for the block graph model."""

from blockgen.workspace import Block, InputType, Workspace


class TestBlock:
    """Test cases for Block."""

    def test_connections_set_parent(self):
        """Test that connecting a block records its parent."""
        holder = Block(type="math_arithmetic")
        child = holder.connect_value("A", Block(type="math_number"))
        after = holder.set_next(Block(type="text_print"))

        assert child.parent is holder
        assert after.parent is holder
        assert holder.get_input_target_block("A") is child
        assert holder.get_input("A").kind == InputType.VALUE

    def test_missing_input(self):
        """Test that unknown inputs have no target."""
        assert Block(type="x").get_input_target_block("NOPE") is None

    def test_reconnect_detaches_from_old_parent(self):
        """Test that a block moved to another input leaves its old slot empty."""
        first = Block(type="controls_if")
        second = Block(type="controls_if")
        body = first.connect_statement("DO", Block(type="text_print"))

        second.connect_statement("DO", body)

        assert first.get_input_target_block("DO") is None
        assert second.get_input_target_block("DO") is body
        assert body.parent is second

    def test_descendants_depth_first(self):
        """Test that descendants list inputs in declaration order, then next."""
        root = Block(type="controls_if", id="root")
        condition = root.connect_value("IF0", Block(type="logic_boolean", id="cond"))
        body = root.connect_statement("DO0", Block(type="text_print", id="body"))
        body.connect_value("TEXT", Block(type="text", id="text"))
        root.set_next(Block(type="text_print", id="next"))

        ids = [block.id for block in root.get_descendants()]

        assert ids == ["root", "cond", "body", "text", "next"]
        assert condition in root.get_children()

    def test_inputs_by_kind(self):
        """Test filtering inputs by kind."""
        block = Block(type="controls_if")
        block.add_input("IF0", InputType.VALUE)
        block.add_input("DO0", InputType.STATEMENT)

        assert [slot.name for slot in block.value_inputs()] == ["IF0"]
        assert [slot.name for slot in block.statement_inputs()] == ["DO0"]

    def test_field_and_comment_accessors(self):
        """Test field and comment lookups."""
        block = Block(type="variables_get", fields={"VAR": "x"}, comment="")

        assert block.get_field_value("VAR") == "x"
        assert block.get_field_value("MISSING") is None
        assert block.get_comment_text() is None


class TestWorkspace:
    """Test cases for Workspace."""

    def test_top_blocks_exclude_connected_blocks(self):
        """Test that only unattached blocks are top-level, in insertion order."""
        workspace = Workspace()
        first = workspace.new_block("text_print")
        nested = workspace.new_block("text")
        second = workspace.new_block("text_print")
        second.connect_value("TEXT", nested)

        assert workspace.get_top_blocks() == [first, second]
        assert len(workspace) == 3

    def test_new_block_assigns_ids(self):
        """Test that blocks without ids get generated ones."""
        workspace = Workspace()
        block = workspace.new_block("text")
        named = workspace.new_block("text", id="mine")

        assert block.id == "b1"
        assert workspace.get_block_by_id("mine") is named
        assert workspace.get_block_by_id("nope") is None
