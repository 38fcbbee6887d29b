import graphviz


def matrix_to_digraph(matrix, title="MATRIX"):
    """
    Build a Graphviz grid of the stored elements of a matrix.

    Row nodes (orange) form the first column, column nodes (green) the top row,
    and every stored element becomes a white node linked from its row and
    column node.

    Args:
        matrix (SparseMatrix): Matrix to render
        title (str): Label of the header node

    Returns:
        graphviz.Digraph: The graph, not yet rendered
    """
    dot = graphviz.Digraph(format='svg')
    dot.attr(rankdir='LR', nodesep='0.7', ranksep='0.7', splines='ortho')
    dot.attr('node', shape='box', style='filled', fontname='Arial')

    dot.node('header', title, fillcolor='#f9f9b6', width='2.2', height='0.7')

    elements = matrix.get_non_zero_elements()
    rows = sorted({r for r, _ in elements})
    cols = sorted({c for _, c in elements})

    col_nodes = []
    for col in cols:
        node_id = f'col_{col}'
        dot.node(node_id, f'col {col}', fillcolor='#b6f9b6', width='1.2', height='0.7')
        dot.edge('header', node_id)
        col_nodes.append(node_id)

    for row in rows:
        node_id = f'row_{row}'
        dot.node(node_id, f'row {row}', fillcolor='#ff9966', width='1.5', height='0.7')
        dot.edge('header', node_id)

    if col_nodes:
        dot.body.append('{rank=same; ' + ' '.join(['header'] + col_nodes) + ';}')

    for (row, col), value in sorted(elements.items()):
        value_node = f'v_{row}_{col}'
        dot.node(value_node, str(value), fillcolor='white', width='1', height='0.7')
        dot.edge(f'row_{row}', value_node)
        dot.edge(f'col_{col}', value_node)

    # Invisible edges keep each row on one line
    for row in rows:
        prev = f'row_{row}'
        for col in cols:
            if (row, col) in elements:
                dot.edge(prev, f'v_{row}_{col}', style='invis')
                prev = f'v_{row}_{col}'

    return dot


def render_matrix(matrix, output_format='dot', title="MATRIX"):
    """Return DOT source, or the rendered bytes for any other Graphviz format"""
    dot = matrix_to_digraph(matrix, title=title)
    if output_format == 'dot':
        return dot.source
    return dot.pipe(format=output_format)
