import logging

import click


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.option('--show-tree', is_flag=True, help='Print the heap forest')
def demo(show_tree):
    """Insert a few keys and extract the minimum."""
    from fibqueue import FibHeap, heap_view

    heap = FibHeap()
    for key in (10, 3, 15, 6):
        heap.insert(key)

    click.echo(f'Minimum key: {heap.peek_min()}')
    click.echo(f'Removed min: {heap.extract_min()}')
    click.echo(f'New minimum key: {heap.peek_min()}')
    click.echo(f'Size: {len(heap)}')
    if show_tree:
        click.echo(heap_view(heap), nl=False)


@main.command()
@click.option('--count', '-n', default=10, help='How many random keys')
@click.option('--seed', default=None, type=int, help='Random seed')
@click.argument('numbers', nargs=-1, type=float)
def sort(count, seed, numbers):
    """Heap-sort NUMBERS, or COUNT random integers if none are given."""
    import random

    from fibqueue import FibHeap

    if not numbers:
        rng = random.Random(seed)
        numbers = [rng.randint(0, 100 * count) for _ in range(count)]

    heap = FibHeap()
    for x in numbers:
        heap.insert(x)
    out = []
    while heap:
        out.append(f'{heap.extract_min():g}')
    click.echo(' '.join(out))


@main.command('shortest-path')
@click.option('--directed', is_flag=True, help='Edges are one-way')
@click.argument('edges_file', type=click.File('r'))
@click.argument('source')
@click.argument('target', required=False)
def shortest_path_(directed, edges_file, source, target):
    """
    Shortest paths over the edges in EDGES_FILE, one "u v [weight]" per line.

    Prints the distance to every vertex reachable from SOURCE, or the path
    to TARGET.
    """
    from fibqueue import dijkstra, shortest_path

    edges = []
    for lineno, line in enumerate(edges_file, 1):
        line = line.split('#', 1)[0].strip()
        if not line:
            continue
        fields = line.split()
        try:
            if len(fields) not in (2, 3):
                raise ValueError('expected "u v [weight]"')
            u, v, *w = fields
            edges.append((u, v, float(w[0]) if w else 1.0))
        except ValueError as e:
            raise click.BadParameter(f'line {lineno}: {e}',
                                     param_hint='EDGES_FILE')

    try:
        dist, _ = dijkstra(edges, source, directed)
    except ValueError as e:
        raise click.ClickException(str(e))

    if target is None:
        for v, d in sorted(dist.items(), key=lambda item: item[1]):
            click.echo(f'{v}\t{d:g}')
        return

    path = shortest_path(edges, source, target, directed)
    if not path:
        raise click.ClickException(f'{target} is unreachable from {source}')
    click.echo(' -> '.join(path))
    click.echo(f'distance: {dist[target]:g}')


if __name__ == '__main__':
    main()
