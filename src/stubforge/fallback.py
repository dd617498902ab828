"""Built-in stub table used when no stub file is found on disk.

The API variants ship only as files in the package `stubs/` directory and are
read from there, so every stub has a single source.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Mapping

__all__ = ["FALLBACK_STUBS", "NOT_FOUND_STUB", "PACKAGED_STUBS_DIR"]


NOT_FOUND_STUB = "<?php // Stub not found\n"
PACKAGED_STUBS_DIR = Path(__file__).parent / "stubs"


def _packaged(name: str) -> str:
    return (PACKAGED_STUBS_DIR / f"{name}.stub").read_text(encoding="utf-8")


MODEL_STUB = """<?php

namespace {{namespace}}\\Models;

use Illuminate\\Database\\Eloquent\\Factories\\HasFactory;
use Illuminate\\Database\\Eloquent\\Model;
use Illuminate\\Database\\Eloquent\\SoftDeletes;

class {{moduleName}} extends Model
{
    use HasFactory, SoftDeletes;

    /**
     * The attributes that are mass assignable.
     *
     * @var array<int, string>
     */
    protected $fillable = [
        'name',
        'description',
        'status',
    ];

    /**
     * The attributes that should be cast.
     *
     * @var array<string, string>
     */
    protected $casts = [
        'created_at' => 'datetime',
        'updated_at' => 'datetime',
        'deleted_at' => 'datetime',
    ];
}
"""

CONTROLLER_STUB = """<?php

namespace {{namespace}}\\Http\\Controllers;

use {{namespace}}\\Services\\{{moduleName}}\\{{moduleName}}Service;
use {{namespace}}\\Http\\Requests\\{{moduleName}}\\StoreRequest;
use {{namespace}}\\Http\\Requests\\{{moduleName}}\\UpdateRequest;
use {{namespace}}\\Http\\Requests\\{{moduleName}}\\IndexRequest;

class {{moduleName}}Controller extends Controller
{
    protected ${{moduleNameLower}}Service;

    public function __construct({{moduleName}}Service ${{moduleNameLower}}Service)
    {
        $this->{{moduleNameLower}}Service = ${{moduleNameLower}}Service;
    }

    /**
     * Display a listing of the resource.
     */
    public function index(IndexRequest $request)
    {
        $data = $this->{{moduleNameLower}}Service->getAll($request->validated());

        return view('{{moduleNameLower}}.index', compact('data'));
    }

    /**
     * Show the form for creating a new resource.
     */
    public function create()
    {
        return view('{{moduleNameLower}}.create');
    }

    /**
     * Store a newly created resource in storage.
     */
    public function store(StoreRequest $request)
    {
        $this->{{moduleNameLower}}Service->create($request->validated());

        return redirect()
            ->route('{{moduleNameLower}}.index')
            ->with('success', '{{moduleName}} created successfully.');
    }

    /**
     * Display the specified resource.
     */
    public function show($id)
    {
        ${{moduleNameLower}} = $this->{{moduleNameLower}}Service->find($id);

        return view('{{moduleNameLower}}.show', compact('{{moduleNameLower}}'));
    }

    /**
     * Show the form for editing the specified resource.
     */
    public function edit($id)
    {
        ${{moduleNameLower}} = $this->{{moduleNameLower}}Service->find($id);

        return view('{{moduleNameLower}}.edit', compact('{{moduleNameLower}}'));
    }

    /**
     * Update the specified resource in storage.
     */
    public function update(UpdateRequest $request, $id)
    {
        $this->{{moduleNameLower}}Service->update($id, $request->validated());

        return redirect()
            ->route('{{moduleNameLower}}.index')
            ->with('success', '{{moduleName}} updated successfully.');
    }

    /**
     * Remove the specified resource from storage.
     */
    public function destroy($id)
    {
        $this->{{moduleNameLower}}Service->delete($id);

        return redirect()
            ->route('{{moduleNameLower}}.index')
            ->with('success', '{{moduleName}} deleted successfully.');
    }
}
"""

REQUEST_STUB = """<?php

namespace {{namespace}}\\Http\\Requests\\{{moduleName}};

use Illuminate\\Foundation\\Http\\FormRequest;

class {{requestType}}Request extends FormRequest
{
    /**
     * Determine if the user is authorized to make this request.
     */
    public function authorize(): bool
    {
        return true;
    }

    /**
     * Get the validation rules that apply to the request.
     *
     * @return array<string, \\Illuminate\\Contracts\\Validation\\ValidationRule|array<mixed>|string>
     */
    public function rules(): array
    {
        return [
            // Add validation rules here
        ];
    }

    /**
     * Get custom messages for validator errors.
     */
    public function messages(): array
    {
        return [
            // Custom messages
        ];
    }
}
"""

SERVICE_STUB = """<?php

namespace {{namespace}}\\Services\\{{moduleName}};

use {{namespace}}\\Repositories\\{{moduleName}}\\{{moduleName}}RepositoryInterface;
use Illuminate\\Support\\Facades\\DB;
use Illuminate\\Support\\Facades\\Log;
use Exception;

class {{moduleName}}Service
{
    protected $repository;

    public function __construct({{moduleName}}RepositoryInterface $repository)
    {
        $this->repository = $repository;
    }

    /**
     * Get all {{moduleNamePluralLower}}.
     */
    public function getAll(array $filters = [])
    {
        try {
            return $this->repository->getAllWithFilters($filters);
        } catch (Exception $e) {
            Log::error('Failed to fetch {{moduleNamePluralLower}}: ' . $e->getMessage());
            throw $e;
        }
    }

    /**
     * Find a {{moduleNameLower}} by id.
     */
    public function find($id)
    {
        try {
            return $this->repository->find($id);
        } catch (Exception $e) {
            Log::error('Failed to fetch {{moduleNameLower}}: ' . $e->getMessage());
            throw $e;
        }
    }

    /**
     * Create a new {{moduleNameLower}}.
     */
    public function create(array $data)
    {
        DB::beginTransaction();

        try {
            $data['created_by'] = auth()->id();

            ${{moduleNameLower}} = $this->repository->create($data);

            DB::commit();

            return ${{moduleNameLower}};
        } catch (Exception $e) {
            DB::rollBack();
            Log::error('Failed to create {{moduleNameLower}}: ' . $e->getMessage());
            throw $e;
        }
    }

    /**
     * Update a {{moduleNameLower}}.
     */
    public function update($id, array $data)
    {
        DB::beginTransaction();

        try {
            $data['updated_by'] = auth()->id();

            ${{moduleNameLower}} = $this->repository->update($id, $data);

            DB::commit();

            return ${{moduleNameLower}};
        } catch (Exception $e) {
            DB::rollBack();
            Log::error('Failed to update {{moduleNameLower}}: ' . $e->getMessage());
            throw $e;
        }
    }

    /**
     * Delete a {{moduleNameLower}}.
     */
    public function delete($id)
    {
        DB::beginTransaction();

        try {
            $result = $this->repository->delete($id);

            DB::commit();

            return $result;
        } catch (Exception $e) {
            DB::rollBack();
            Log::error('Failed to delete {{moduleNameLower}}: ' . $e->getMessage());
            throw $e;
        }
    }
}
"""

REPOSITORY_INTERFACE_STUB = """<?php

namespace {{namespace}}\\Repositories\\{{moduleName}};

interface {{moduleName}}RepositoryInterface
{
    /**
     * Get every record.
     */
    public function all();

    /**
     * Get every record matching the given filters.
     */
    public function getAllWithFilters(array $filters);

    /**
     * Find a record by id.
     */
    public function find($id);

    /**
     * Create a new record.
     */
    public function create(array $data);

    /**
     * Update a record.
     */
    public function update($id, array $data);

    /**
     * Delete a record.
     */
    public function delete($id);

    /**
     * Count the records.
     */
    public function count();

    /**
     * Check whether a record exists.
     */
    public function exists($id);
}
"""

REPOSITORY_STUB = """<?php

namespace {{namespace}}\\Repositories\\{{moduleName}};

use {{namespace}}\\Models\\{{moduleName}};
use Illuminate\\Database\\Eloquent\\ModelNotFoundException;

class {{moduleName}}Repository implements {{moduleName}}RepositoryInterface
{
    protected $model;

    public function __construct({{moduleName}} $model)
    {
        $this->model = $model;
    }

    public function all()
    {
        return $this->model->all();
    }

    public function getAllWithFilters(array $filters)
    {
        $query = $this->model->query();

        if (!empty($filters['search'])) {
            $query->where(function ($q) use ($filters) {
                $q->where('name', 'like', '%' . $filters['search'] . '%')
                  ->orWhere('description', 'like', '%' . $filters['search'] . '%');
            });
        }

        $sortBy = $filters['sort_by'] ?? 'created_at';
        $sortOrder = $filters['sort_order'] ?? 'desc';
        $query->orderBy($sortBy, $sortOrder);

        $perPage = $filters['per_page'] ?? 15;

        return $query->paginate($perPage);
    }

    public function find($id)
    {
        ${{moduleNameLower}} = $this->model->find($id);

        if (!${{moduleNameLower}}) {
            throw new ModelNotFoundException('{{moduleName}} not found');
        }

        return ${{moduleNameLower}};
    }

    public function create(array $data)
    {
        return $this->model->create($data);
    }

    public function update($id, array $data)
    {
        ${{moduleNameLower}} = $this->find($id);
        ${{moduleNameLower}}->update($data);

        return ${{moduleNameLower}}->fresh();
    }

    public function delete($id)
    {
        ${{moduleNameLower}} = $this->find($id);

        return ${{moduleNameLower}}->delete();
    }

    public function count()
    {
        return $this->model->count();
    }

    public function exists($id)
    {
        return $this->model->where('id', $id)->exists();
    }
}
"""

SERVICE_PROVIDER_STUB = """<?php

namespace {{namespace}}\\Providers;

use Illuminate\\Support\\ServiceProvider;

class RepositoryServiceProvider extends ServiceProvider
{
    /**
     * Register services.
     */
    public function register(): void
    {
        // Repository bindings are added here, for example:
        // $this->app->bind(
        //     \\{{namespace}}\\Repositories\\Item\\ItemRepositoryInterface::class,
        //     \\{{namespace}}\\Repositories\\Item\\ItemRepository::class
        // );
    }

    /**
     * Bootstrap services.
     */
    public function boot(): void
    {
        //
    }
}
"""

ROUTES_STUB = """<?php

use Illuminate\\Support\\Facades\\Route;
use {{namespace}}\\Http\\Controllers\\{{moduleName}}Controller;

/**
 * {{moduleName}} routes
 */
Route::prefix('{{moduleNamePluralLower}}')->name('{{moduleNameLower}}.')->group(function () {
    Route::get('/', [{{moduleName}}Controller::class, 'index'])->name('index');
    Route::get('/create', [{{moduleName}}Controller::class, 'create'])->name('create');
    Route::post('/', [{{moduleName}}Controller::class, 'store'])->name('store');
    Route::get('/{id}', [{{moduleName}}Controller::class, 'show'])->name('show');
    Route::get('/{id}/edit', [{{moduleName}}Controller::class, 'edit'])->name('edit');
    Route::put('/{id}', [{{moduleName}}Controller::class, 'update'])->name('update');
    Route::delete('/{id}', [{{moduleName}}Controller::class, 'destroy'])->name('destroy');
});
"""

ADMIN_SEEDER_STUB = """<?php

namespace Database\\Seeders;

use {{namespace}}\\Models\\User;
use Illuminate\\Database\\Seeder;
use Illuminate\\Support\\Facades\\Hash;
use Spatie\\Permission\\Models\\Permission;
use Spatie\\Permission\\Models\\Role;

class AdminSeeder extends Seeder
{
    public function run(): void
    {
        $adminRole = Role::firstOrCreate(['name' => 'admin']);
        Role::firstOrCreate(['name' => 'user']);

        $permissions = [
            'view-dashboard',
            'manage-users',
            'manage-roles',
            'manage-permissions',
        ];

        foreach ($permissions as $permission) {
            Permission::firstOrCreate(['name' => $permission]);
        }

        $adminRole->syncPermissions(Permission::all());

        $admin = User::firstOrCreate(
            ['email' => 'admin@example.com'],
            [
                'name' => 'Admin User',
                'password' => Hash::make('secret'),
                'email_verified_at' => now(),
            ]
        );

        $admin->assignRole('admin');

        $this->command->info('Admin user created: admin@example.com / secret');
    }
}
"""


FALLBACK_STUBS: Mapping[str, str] = MappingProxyType(
    {
        "model": MODEL_STUB,
        "controller": CONTROLLER_STUB,
        "controller-api": _packaged("controller-api"),
        "request": REQUEST_STUB,
        "request-api": _packaged("request-api"),
        "service": SERVICE_STUB,
        "service-api": _packaged("service-api"),
        "repository-interface": REPOSITORY_INTERFACE_STUB,
        "repository": REPOSITORY_STUB,
        "repository-interface-api": _packaged("repository-interface-api"),
        "repository-api": _packaged("repository-api"),
        "service-provider": SERVICE_PROVIDER_STUB,
        "routes": ROUTES_STUB,
        "admin-seeder": ADMIN_SEEDER_STUB,
    }
)
