"""Generation of traversal handler source and of projects that hold it."""