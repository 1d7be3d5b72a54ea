'''Pure Python building blocks of the suffix tree: codec, buffer, arena, builder and matcher.'''
